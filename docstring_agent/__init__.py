"""Locate documentable source elements and insert LLM-written doc comments."""

__version__ = "0.1.0"
