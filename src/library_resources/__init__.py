"""Local registry of cloned documentation repositories."""

__version__ = "0.1.0"
