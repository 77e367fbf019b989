"""
MCP Tools for decade cycle guidance.

- meanings: Guidance lookups, palace summaries, key listings and coverage
"""

from .meanings import register_meaning_tools

__all__ = [
    "register_meaning_tools",
]
