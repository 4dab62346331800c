"""
Document Formatters - Render the ticket set for publishing.
"""

from .html import HtmlArtifactFormatter, STATUS_STYLES, status_slug, status_css_class

__all__ = [
    "HtmlArtifactFormatter",
    "STATUS_STYLES",
    "status_slug",
    "status_css_class",
]
