"""Static site builder for a manifest of Markdown chapters and volumes."""

__version__ = "0.1.0"
