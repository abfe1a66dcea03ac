"""Diplomacy variant catalog and stateless resolution service."""

__version__ = "0.1.0"
