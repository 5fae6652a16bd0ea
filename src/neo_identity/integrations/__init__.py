"""Framework integrations for neo-identity."""
