"""Unsent: a terminal archive of prose and poems, with private drafts."""

__version__ = "0.1.0"

__all__ = ["__version__"]
