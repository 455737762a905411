"""Upload pipeline: validation, storage and the HTTP route."""
