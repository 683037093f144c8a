"""Local task/event organizer."""

__version__ = "0.1.0"
