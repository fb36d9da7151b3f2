"""Product catalog admin panel."""

__version__ = "0.1.0"
