"""Ports (Protocols) implemented by infrastructure."""
