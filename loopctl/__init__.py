"""Command execution and undo/redo engine for an automated task loop."""

__version__ = "0.1.0"
