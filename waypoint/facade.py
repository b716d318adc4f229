"""Single call surface combining transitions and checkpoints."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from . import checkpoints
from .context import WorkflowContext
from .engine import TransitionEngine
from .results import OperationResult, TransitionResult
from .states import StateChain


class WorkflowFacade:
    """Drive one context through its chain and its checkpoint history.

    The facade adds no rules of its own; it forwards to ``TransitionEngine``
    and the checkpoint functions and folds their outcomes into
    ``OperationResult``.
    """

    def __init__(
        self, context: WorkflowContext, engine: Optional[TransitionEngine] = None
    ) -> None:
        self.context = context
        self.engine = engine or TransitionEngine(context.chain)

    @classmethod
    def start(
        cls,
        chain: StateChain,
        payload: Optional[Mapping[str, Any]] = None,
        context_id: Optional[str] = None,
        history_depth: Optional[int] = None,
    ) -> "WorkflowFacade":
        context = WorkflowContext.create(
            chain, payload=payload, context_id=context_id, history_depth=history_depth
        )
        return cls(context)

    @property
    def payload(self) -> Dict[str, Any]:
        return self.context.payload

    def update(self, **attrs: Any) -> None:
        self.context.set(**attrs)

    def _result(self, operation: str, **kwargs: Any) -> OperationResult:
        kwargs.setdefault("ok", True)
        return OperationResult(
            operation=operation,
            state=self.engine.current_label(self.context),
            pending_checkpoints=len(self.context.history),
            **kwargs,
        )

    def _from_transition(self, operation: str, result: TransitionResult) -> OperationResult:
        return self._result(operation, ok=result.ok, error=result.error)

    def advance(self) -> OperationResult:
        return self._from_transition("advance", self.engine.advance(self.context))

    def revert(self) -> OperationResult:
        return self._from_transition("revert", self.engine.revert(self.context))

    def checkpoint(self) -> OperationResult:
        snapshot = checkpoints.checkpoint(self.context)
        return self._result("checkpoint", snapshot=snapshot)

    def undo(self) -> OperationResult:
        result = checkpoints.undo(self.context)
        return self._result(
            "undo", ok=result.ok, snapshot=result.snapshot, error=result.error
        )

    def status(self) -> OperationResult:
        return self._result("status")

    def describe(self) -> str:
        """Human-readable line for the current state."""
        state = self.context.current_state
        return state.description or f"Current state: {state.label}"
