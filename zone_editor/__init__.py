"""Zone editor: built-in zone templates and editor settings."""

__version__ = "0.1.0"
