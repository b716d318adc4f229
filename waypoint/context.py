"""The mutable entity that moves through a chain."""

from __future__ import annotations

import uuid
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .history import History
from .states import StateChain, StateDefinition


class WorkflowContext(BaseModel):
    """Current state pointer, payload attributes and the owned history.

    Assignments are validated, so ``current_state`` can never be set to a
    state outside ``chain``. The id, the chain and the history are fixed at
    construction.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    context_id: str = Field(default_factory=lambda: str(uuid.uuid4()), frozen=True)
    chain: StateChain = Field(frozen=True)
    current_state: StateDefinition
    payload: Dict[str, Any] = Field(default_factory=dict)
    history: History = Field(default_factory=History, exclude=True, frozen=True)

    @field_validator("current_state")
    @classmethod
    def _state_belongs_to_chain(
        cls, v: StateDefinition, info: ValidationInfo
    ) -> StateDefinition:
        chain = info.data.get("chain")
        if chain is not None and v not in chain:
            raise ValueError(f"State {v.label} is not part of the context's chain")
        return v

    @classmethod
    def create(
        cls,
        chain: StateChain,
        payload: Optional[Mapping[str, Any]] = None,
        context_id: Optional[str] = None,
        history_depth: Optional[int] = None,
    ) -> "WorkflowContext":
        """Start a new context at the chain's initial state."""
        data: Dict[str, Any] = {
            "chain": chain,
            "current_state": chain.initial,
            "payload": dict(payload or {}),
            "history": History(max_depth=history_depth),
        }
        if context_id is not None:
            data["context_id"] = context_id
        return cls(**data)

    @property
    def label(self) -> str:
        return self.current_state.label

    def set(self, **attrs: Any) -> None:
        """Write payload attributes."""
        self.payload.update(attrs)

    def get(self, key: str, default: Any = None) -> Any:
        return self.payload.get(key, default)
