"""wikigraph - relation graph engine for a personal wiki."""

__version__ = "0.1.0"
