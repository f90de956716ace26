"""
Codevault - personal code snippet archive

A CLI tool that captures code snippets from the terminal, tags them, and
lets you search, edit, export or delete them later.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from codevault.core.snippets.models import Snippet, SnippetChanges
from codevault.core.snippets.query import FilterSpec

__all__ = ["FilterSpec", "Snippet", "SnippetChanges", "__version__"]
