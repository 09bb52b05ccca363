"""Admin backend for a sports-league content panel."""

__version__ = "0.1.0"
