"""
Document Parsers - Convert source documents into domain entities.
"""

from .html_table import HtmlTableParser

__all__ = ["HtmlTableParser"]
