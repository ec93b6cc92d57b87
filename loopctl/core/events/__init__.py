"""
Event primitives.

Provides:
- Signal: synchronous observer used for config changes and undo/redo state

Usage:
    from loopctl.core.events import Signal

    changed = Signal("HistoryChanged")
    changed.connect(lambda: print("history changed"))
    changed.emit()
"""
from .observer import Signal


__all__ = ["Signal"]
