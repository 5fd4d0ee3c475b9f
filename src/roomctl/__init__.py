"""roomctl — classroom workstation directory CLI."""

__version__ = "0.1.0"
