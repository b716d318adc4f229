"""Forward and backward moves along a state chain."""

from __future__ import annotations

import logging

from .context import WorkflowContext
from .results import InitialStateError, TerminalStateError, TransitionResult
from .states import StateChain

logger = logging.getLogger(__name__)


class TransitionEngine:
    """Applies one-step transitions to contexts built on ``chain``.

    A refused move leaves the context untouched and comes back as a failed
    ``TransitionResult``.
    """

    def __init__(self, chain: StateChain) -> None:
        self.chain = chain

    def _check_context(self, context: WorkflowContext) -> None:
        if context.chain is not self.chain and context.chain != self.chain:
            raise ValueError(
                f"Context {context.context_id} was built on a different chain"
            )

    def advance(self, context: WorkflowContext) -> TransitionResult:
        self._check_context(context)
        current = context.current_state
        if current.is_terminal:
            logger.info(
                f"Refused advance from terminal state {current.label} for context_id={context.context_id}"
            )
            return TransitionResult(
                ok=False,
                previous=current.label,
                current=current.label,
                error=TerminalStateError(state=current.label),
            )

        context.current_state = self.chain.successor_of(current)
        logger.debug(
            f"Advanced {current.label} -> {context.label} for context_id={context.context_id}"
        )
        return TransitionResult(ok=True, previous=current.label, current=context.label)

    def revert(self, context: WorkflowContext) -> TransitionResult:
        self._check_context(context)
        current = context.current_state
        if current.is_initial:
            logger.info(
                f"Refused revert from initial state {current.label} for context_id={context.context_id}"
            )
            return TransitionResult(
                ok=False,
                previous=current.label,
                current=current.label,
                error=InitialStateError(state=current.label),
            )

        context.current_state = self.chain.predecessor_of(current)
        logger.debug(
            f"Reverted {current.label} -> {context.label} for context_id={context.context_id}"
        )
        return TransitionResult(ok=True, previous=current.label, current=context.label)

    def current_label(self, context: WorkflowContext) -> str:
        return context.current_state.label

    def can_advance(self, context: WorkflowContext) -> bool:
        return not context.current_state.is_terminal

    def can_revert(self, context: WorkflowContext) -> bool:
        return not context.current_state.is_initial
