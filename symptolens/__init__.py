"""SymptoLens condition scoring and validation service."""

__version__ = "1.0.0"
