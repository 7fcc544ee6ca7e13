"""Shared helpers: constants, errors and logging."""
