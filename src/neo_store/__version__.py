"""Version information for neo-store."""

__version__ = "0.1.0"
