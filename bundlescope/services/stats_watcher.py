"""Poll a stats file and hand fresh stats to the live server when it changes."""

import asyncio
import json
from pathlib import Path
from typing import Any, Callable, Optional, Tuple

from bundlescope.logging_config import get_logger


def load_stats_file(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


class StatsFileWatcher:
    def __init__(self, path: Path, on_change: Callable[[Any], None], interval: float = 1.0):
        self.path = Path(path)
        self._on_change = on_change
        self._interval = interval
        self._task: Optional[asyncio.Task] = None
        self._signature: Optional[Tuple[int, int]] = None
        self._logger = get_logger("watcher")

    def _current_signature(self) -> Optional[Tuple[int, int]]:
        try:
            stat = self.path.stat()
        except FileNotFoundError:
            return None
        return stat.st_mtime_ns, stat.st_size

    async def start(self) -> None:
        if self._task is not None:
            return
        self._signature = self._current_signature()
        self._task = asyncio.create_task(self._watch())
        self._logger.debug("Watching %s every %ss", self.path, self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    def check(self) -> bool:
        """Reload and dispatch if the file changed since the last check; True when dispatched."""
        signature = self._current_signature()
        if signature is None or signature == self._signature:
            return False
        self._signature = signature

        try:
            stats = load_stats_file(self.path)
        except (OSError, ValueError) as exc:
            self._logger.error("Couldn't read stats file %s: %s", self.path, exc)
            return False

        self._logger.info("Stats file changed, refreshing chart data")
        self._on_change(stats)
        return True

    async def _watch(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self.check()
            except Exception as exc:
                self._logger.error("Couldn't refresh chart data from %s: %s", self.path, exc)
