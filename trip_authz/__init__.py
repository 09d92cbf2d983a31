"""Trip authorization and policy synchronization."""

__version__ = "0.1.0"
