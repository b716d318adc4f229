"""Checkpoint and undo operations over a context's own history."""

from __future__ import annotations

import logging
from typing import Optional

from .context import WorkflowContext
from .history import Snapshot
from .results import EmptyHistoryError, UndoResult

logger = logging.getLogger(__name__)


def checkpoint(context: WorkflowContext) -> Snapshot:
    """Capture the current payload on the context's history."""
    snapshot = context.history.push(context.payload)
    logger.debug(
        f"Saved checkpoint #{snapshot.sequence_number} for context_id={context.context_id}"
    )
    return snapshot


def undo(context: WorkflowContext) -> UndoResult:
    """Restore the most recent checkpoint, replacing the whole payload.

    With no checkpoints saved the payload is left exactly as it is.
    """
    snapshot = context.history.pop()
    if snapshot is None:
        logger.info(f"Nothing to undo for context_id={context.context_id}")
        return UndoResult(ok=False, error=EmptyHistoryError())

    context.payload = snapshot.restore_payload()
    logger.debug(
        f"Restored checkpoint #{snapshot.sequence_number} for context_id={context.context_id}"
    )
    return UndoResult(ok=True, snapshot=snapshot)


def peek(context: WorkflowContext) -> Optional[Snapshot]:
    return context.history.peek()
