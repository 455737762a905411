"""Filesystem helpers for staged and published uploads."""
