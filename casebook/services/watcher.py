"""Change watcher that re-runs validation when corpus files are edited."""

import logging
import time
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


class CorpusWatcher:
    """Polling file-change watcher over markdown files in one or more roots."""

    def __init__(
        self,
        roots: Iterable,
        on_change: Optional[Callable[[List[Path]], None]] = None,
        check_interval: float = 2.0,
        patterns: Iterable[str] = ("**/*.md",),
    ):
        self.roots = [Path(r) for r in roots]
        self.on_change = on_change  # callback e.g. re-validate changed docs
        self.check_interval = check_interval
        self.patterns = list(patterns)
        self._last_check = 0.0
        self._watch_mtimes: Dict[str, float] = {}
        self.refresh_snapshot()

    def _iter_watch_files(self):
        """Yield files that should trigger re-validation."""
        for root in self.roots:
            if not root.is_dir():
                continue
            for pattern in self.patterns:
                yield from root.glob(pattern)

    def _snapshot(self) -> Dict[str, float]:
        snapshot: Dict[str, float] = {}
        for path in self._iter_watch_files():
            try:
                if path.is_file():
                    snapshot[str(path)] = path.stat().st_mtime
            except OSError:
                continue
        return snapshot

    def refresh_snapshot(self):
        """Capture latest file mtimes for watched files."""
        self._watch_mtimes = self._snapshot()

    def detect_changes(self) -> Dict[str, List[Path]]:
        """Compare against the last snapshot and advance it.

        Returns: {"changed": [...added or modified...], "removed": [...]}
        """
        current = self._snapshot()
        changed = [
            Path(key) for key, mtime in current.items()
            if key not in self._watch_mtimes or mtime > self._watch_mtimes[key]
        ]
        removed = [Path(key) for key in self._watch_mtimes if key not in current]
        self._watch_mtimes = current
        return {"changed": sorted(changed), "removed": sorted(removed)}

    def check_and_apply(self, force: bool = False) -> bool:
        """Invoke on_change if files changed since the last check.

        Returns True when the callback ran.
        """
        now = time.time()
        if not force and now - self._last_check < self.check_interval:
            return False
        self._last_check = now

        changes = self.detect_changes()
        if not changes["changed"] and not changes["removed"]:
            return False

        if changes["removed"]:
            logger.info("Removed: %s", [str(p) for p in changes["removed"]])
        if changes["changed"]:
            logger.info("Changed: %s", [str(p) for p in changes["changed"]])

        if self.on_change is not None:
            self.on_change(changes["changed"] + changes["removed"])
        return True

    def run(self, max_cycles: Optional[int] = None):
        """Poll until interrupted (or for max_cycles iterations)."""
        cycles = 0
        logger.info("Watching %s", ", ".join(str(r) for r in self.roots))
        try:
            while max_cycles is None or cycles < max_cycles:
                self.check_and_apply()
                cycles += 1
                time.sleep(self.check_interval)
        except KeyboardInterrupt:
            logger.info("Watcher stopped")
