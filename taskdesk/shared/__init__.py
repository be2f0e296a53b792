"""Shared utilities used across layers (logging, UTC time, identifiers)."""
