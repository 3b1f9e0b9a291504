"""meetcal: weekly availability sharing for small groups."""

__version__ = "0.1.0"
