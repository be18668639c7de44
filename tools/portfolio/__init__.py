"""Static portfolio page builder."""

__version__ = "0.1.0"
