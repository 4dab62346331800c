"""
Artifact Adapters - The published HTML snapshot on disk.
"""

from .html_file import HtmlArtifactFile, PublishResult

__all__ = ["HtmlArtifactFile", "PublishResult"]
