"""
Undo/redo history over full buffer snapshots.

History is linear: committing after an undo discards every entry past the
current index. The number of retained snapshots is bounded; when the bound
is exceeded the oldest snapshot is evicted.

Classes:
    HistoryEntry: Immutable snapshot of a buffer's pixels
    HistoryManager: Bounded list of snapshots plus the current index
"""

from dataclasses import dataclass
from typing import Any, List, Optional
import logging

import numpy as np

from OC_Libs.constants import DEFAULT_HISTORY_CAPACITY
from OC_Libs.MaskEditingLib.image_models import PixelBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class HistoryEntry:
    """Snapshot of the buffer at the end of a stroke.

    Attributes:
        pixels: Read-only copy of the RGBA array
    """
    pixels: np.ndarray

    def apply_to(self, buffer: PixelBuffer) -> None:
        """Overwrite every pixel of ``buffer`` with this snapshot."""
        buffer.overwrite(self.pixels)


class HistoryManager:
    """
    Bounded, linear undo/redo history.

    Example:
        >>> history = HistoryManager(capacity=20)
        >>> history.commit(buffer)        # initial state, index 0
        >>> history.commit(buffer)        # after a stroke, index 1
        >>> entry = history.undo()
        >>> entry.apply_to(buffer)
    """

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = int(capacity)
        self._entries: List[HistoryEntry] = []
        self._index = -1

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def current_index(self) -> int:
        """Index of the entry matching the buffer, -1 when empty."""
        return self._index

    @property
    def current(self) -> Optional[HistoryEntry]:
        if self._index < 0:
            return None
        return self._entries[self._index]

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return 0 <= self._index < len(self._entries) - 1

    def commit(self, buffer: Any) -> HistoryEntry:
        """
        Snapshot the buffer as the new latest entry.

        Args:
            buffer: PixelBuffer or RGBA numpy array to snapshot

        Returns:
            The new HistoryEntry
        """
        source = buffer.pixels if isinstance(buffer, PixelBuffer) else np.asarray(buffer)
        snapshot = source.copy()
        snapshot.setflags(write=False)
        entry = HistoryEntry(pixels=snapshot)

        discarded = len(self._entries) - (self._index + 1)
        if discarded > 0:
            del self._entries[self._index + 1:]
            logger.debug(f"Discarded {discarded} redo entries")

        self._entries.append(entry)
        if len(self._entries) > self.capacity:
            self._entries.pop(0)
            logger.debug("History full, evicted oldest entry")

        self._index = len(self._entries) - 1
        logger.debug(f"Committed history entry {self._index + 1}/{len(self._entries)}")
        return entry

    def undo(self) -> Optional[HistoryEntry]:
        """Step back one entry. Returns None when there is nothing to undo."""
        if not self.can_undo:
            logger.debug("Nothing to undo")
            return None
        self._index -= 1
        return self._entries[self._index]

    def redo(self) -> Optional[HistoryEntry]:
        """Step forward one entry. Returns None when there is nothing to redo."""
        if not self.can_redo:
            logger.debug("Nothing to redo")
            return None
        self._index += 1
        return self._entries[self._index]

    def reset(self) -> None:
        """Drop every entry."""
        self._entries.clear()
        self._index = -1
