"""Find, list and stop configured tasks among running processes."""

__version__ = "0.1.0"
__all__ = ["__version__"]