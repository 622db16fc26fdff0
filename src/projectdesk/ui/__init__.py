"""Textual user interface for projectdesk."""
