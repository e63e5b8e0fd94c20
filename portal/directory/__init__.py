from .client import DirectoryClient

__all__ = ["DirectoryClient"]
