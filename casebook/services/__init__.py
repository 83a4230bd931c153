"""Long-running helpers for authoring workflows."""

from casebook.services.watcher import CorpusWatcher

__all__ = ["CorpusWatcher"]
