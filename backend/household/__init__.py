"""Shared monthly budget for a two-person household."""

__version__ = "0.1.0"
