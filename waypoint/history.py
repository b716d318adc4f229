"""Snapshots of context payloads and the LIFO history that owns them."""

from __future__ import annotations

import copy
import logging
from collections import deque
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Deque, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

logger = logging.getLogger(__name__)


def copy_payload(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Deep-copy ``payload`` value by value.

    A value that refuses to be copied is kept as the same object.
    """
    copied: Dict[str, Any] = {}
    for key, value in payload.items():
        try:
            copied[key] = copy.deepcopy(value)
        except (TypeError, copy.Error) as exc:
            logger.warning(f"Payload value {key!r} cannot be copied, keeping a reference: {exc}")
            copied[key] = value
    return copied


class Snapshot(BaseModel):
    """Immutable copy of a payload taken at checkpoint time.

    The captured payload is held privately. ``payload`` hands out a
    read-only view over a fresh copy, so nothing a caller does to it can
    change what a later undo restores.
    """

    model_config = ConfigDict(frozen=True)

    sequence_number: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    _payload: Dict[str, Any] = PrivateAttr(default_factory=dict)

    @classmethod
    def capture(cls, sequence_number: int, payload: Mapping[str, Any]) -> "Snapshot":
        snapshot = cls(sequence_number=sequence_number)
        snapshot._payload = copy_payload(payload)
        return snapshot

    @property
    def payload(self) -> Mapping[str, Any]:
        return MappingProxyType(copy_payload(self._payload))

    def restore_payload(self) -> Dict[str, Any]:
        """Return a fresh copy of the captured payload."""
        return copy_payload(self._payload)


class History:
    """Stack of snapshots belonging to a single context.

    Sequence numbers start at 1 and keep increasing for the lifetime of the
    history; popping or clearing never hands a number out twice. When
    ``max_depth`` is set, pushing past it discards the oldest snapshot.
    """

    def __init__(self, max_depth: Optional[int] = None) -> None:
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be a positive integer")
        self.max_depth = max_depth
        self._stack: Deque[Snapshot] = deque()
        self._last_sequence = 0

    def push(self, payload: Mapping[str, Any]) -> Snapshot:
        """Capture ``payload`` as the newest snapshot.

        Values that cannot be deep-copied (locks, open files, generators) are
        kept by reference instead, so a checkpoint never fails on them; those
        values are shared with the live payload.
        """
        self._last_sequence += 1
        snapshot = Snapshot.capture(self._last_sequence, payload)
        self._stack.append(snapshot)
        if self.max_depth is not None and len(self._stack) > self.max_depth:
            dropped = self._stack.popleft()
            logger.debug(
                f"History depth {self.max_depth} exceeded, dropped snapshot #{dropped.sequence_number}"
            )
        return snapshot

    def pop(self) -> Optional[Snapshot]:
        return self._stack.pop() if self._stack else None

    def peek(self) -> Optional[Snapshot]:
        return self._stack[-1] if self._stack else None

    def clear(self) -> None:
        self._stack.clear()

    def snapshots(self) -> Tuple[Snapshot, ...]:
        """Snapshots from oldest to newest."""
        return tuple(self._stack)

    @property
    def last_sequence_number(self) -> int:
        return self._last_sequence

    def __len__(self) -> int:
        return len(self._stack)

    def __bool__(self) -> bool:
        return bool(self._stack)

    def __repr__(self) -> str:  # pragma: no cover - simple formatting
        return f"History(depth={len(self._stack)}, last_sequence={self._last_sequence})"
