"""Waypoint: reversible state chains with checkpoint rollback."""

from .checkpoints import checkpoint, peek, undo
from .config import WaypointConfig, load_config
from .context import WorkflowContext
from .engine import TransitionEngine
from .facade import WorkflowFacade
from .history import History, Snapshot
from .results import (
    EmptyHistoryError,
    InitialStateError,
    OperationResult,
    TerminalStateError,
    TransitionResult,
    UndoResult,
    WorkflowError,
    WorkflowOperationError,
)
from .states import ChainDefinitionError, OrderState, StateChain, StateDefinition, order_chain

__version__ = "0.1.0"
__all__ = [
    "ChainDefinitionError",
    "EmptyHistoryError",
    "History",
    "InitialStateError",
    "OperationResult",
    "OrderState",
    "Snapshot",
    "StateChain",
    "StateDefinition",
    "TerminalStateError",
    "TransitionEngine",
    "TransitionResult",
    "UndoResult",
    "WaypointConfig",
    "WorkflowContext",
    "WorkflowError",
    "WorkflowFacade",
    "WorkflowOperationError",
    "checkpoint",
    "load_config",
    "order_chain",
    "peek",
    "undo",
]
