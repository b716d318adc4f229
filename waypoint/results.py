"""Result and error values returned by workflow operations.

Reaching either end of a chain or undoing with nothing saved are routine
outcomes, so they are reported as values rather than raised. ``unwrap`` is
available for callers that would rather get an exception.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .history import Snapshot


class WorkflowError(BaseModel):
    """Base for recoverable workflow error conditions."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str


class TerminalStateError(WorkflowError):
    code: Literal["terminal_state"] = "terminal_state"
    state: str
    message: str = "This is the final state. No next state."


class InitialStateError(WorkflowError):
    code: Literal["initial_state"] = "initial_state"
    state: str
    message: str = "This is the first state. No previous state."


class EmptyHistoryError(WorkflowError):
    code: Literal["empty_history"] = "empty_history"
    message: str = "No checkpoints to undo."


AnyWorkflowError = Annotated[
    Union[TerminalStateError, InitialStateError, EmptyHistoryError],
    Field(discriminator="code"),
]


class WorkflowOperationError(RuntimeError):
    """Raised by ``unwrap`` when the result it was called on failed."""

    def __init__(self, error: WorkflowError) -> None:
        super().__init__(error.message)
        self.error = error


class TransitionResult(BaseModel):
    """Outcome of ``advance`` or ``revert``."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    previous: str
    current: str
    error: Optional[AnyWorkflowError] = None

    def unwrap(self) -> str:
        """Return the new state label or raise ``WorkflowOperationError``."""
        if self.error is not None:
            raise WorkflowOperationError(self.error)
        return self.current


class UndoResult(BaseModel):
    """Outcome of ``undo``."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    snapshot: Optional[Snapshot] = None
    error: Optional[AnyWorkflowError] = None

    def unwrap(self) -> Snapshot:
        if self.error is not None or self.snapshot is None:
            raise WorkflowOperationError(self.error or EmptyHistoryError())
        return self.snapshot


Operation = Literal["advance", "revert", "checkpoint", "undo", "status"]


class OperationResult(BaseModel):
    """Single result shape produced by ``WorkflowFacade``."""

    model_config = ConfigDict(frozen=True)

    operation: Operation
    ok: bool
    state: str
    pending_checkpoints: int
    snapshot: Optional[Snapshot] = None
    error: Optional[AnyWorkflowError] = None

    def unwrap(self) -> "OperationResult":
        if self.error is not None:
            raise WorkflowOperationError(self.error)
        return self
