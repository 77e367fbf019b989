"""
MCP Resources for decade cycle guidance.

Resources provide context information that can be loaded by MCP clients.
"""

from .content_resources import register_content_resources

__all__ = [
    "register_content_resources",
]
