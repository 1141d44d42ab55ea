"""File transfer over TCP and UDP with MD5 integrity verification."""

__version__ = "0.1.0"
__all__ = ["__version__"]