"""
Decade Guide MCP - Model Context Protocol server for decade cycle guidance.

This package provides a validated, read-only table of guidance text keyed
by decade palace and star, and an MCP server that serves it to AI assistants.
"""

__version__ = "0.1.0"
