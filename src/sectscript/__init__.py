"""Dialogue scripting and dice resolution engine for a sect-management strategy game."""

__version__ = "0.1.0"
