"""Version information for neo-identity."""

__version__ = "0.1.0"
