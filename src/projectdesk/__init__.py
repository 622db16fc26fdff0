"""projectdesk - a terminal project and task tracker backed by a hosted backend."""

__version__ = "0.1.0"
