"""Narrative PySpark walkthroughs and the thin helpers they call."""

__version__ = "0.1.0"
