"""Find rule files by glob pattern, pick them interactively and copy them to a destination."""

__version__ = "0.1.0"
__all__ = ["__version__"]