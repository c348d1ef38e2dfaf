"""Terminal coding agent backed by the Anthropic Messages API."""

__version__ = "0.1.0"
