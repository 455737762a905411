"""PrintShop upload service.

Accepts customer files (3D models, archives, reference images) for print
orders, validates them and publishes them under ``/uploads``.
"""
