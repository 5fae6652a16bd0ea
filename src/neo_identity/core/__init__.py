"""Core building blocks shared by every neo-identity layer."""
