"""Export Apple Notes folders to HTML and extract their embedded attachments."""

__version__ = "0.3.0"

__all__ = ["__version__"]
