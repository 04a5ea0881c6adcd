"""Contextify - extract code context optimized for AI prompts."""

__version__ = "1.0.0"
