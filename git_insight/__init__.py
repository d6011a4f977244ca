"""Structured parsing and heuristic analysis of git command output."""

__version__ = "0.1.0"
