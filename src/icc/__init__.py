"""Intent-based configuration compliance engine."""

__version__ = "0.1.0"
