"""Terminal client for a shared sentence board."""

__version__ = "0.1.0"
