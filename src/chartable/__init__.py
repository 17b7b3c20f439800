"""chartable - query, pagination and infinite loading for a character catalog."""

__version__ = "1.0.0"
