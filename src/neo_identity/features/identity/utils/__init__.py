"""SQL and error helpers for the identity repositories."""
