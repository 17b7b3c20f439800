"""Flask HTTP surface for the character query service."""
