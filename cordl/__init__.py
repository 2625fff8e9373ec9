"""Building blocks for writing C++ header declarations that describe IL2CPP types."""

__version__ = "0.1.0"