"""NBA Profiles - player reference and season profile datasets."""

__version__ = "0.1.0"
