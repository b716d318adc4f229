"""State definitions and the linear chain they form."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, PrivateAttr, model_validator


class ChainDefinitionError(ValueError):
    """Raised when a list of labels cannot form a valid chain."""


class OrderState(str, Enum):
    """Stages of the order lifecycle."""

    NEW = "New"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"


ORDER_DESCRIPTIONS: Dict[str, str] = {
    OrderState.NEW.value: "Order is in NEW state.",
    OrderState.PROCESSING.value: "Order is PROCESSING.",
    OrderState.SHIPPED.value: "Order has been SHIPPED.",
    OrderState.DELIVERED.value: "Order is DELIVERED.",
}


class StateDefinition(BaseModel):
    """One stage of a chain and its permitted neighbors."""

    model_config = ConfigDict(frozen=True)

    label: str
    is_initial: bool = False
    is_terminal: bool = False
    predecessor: Optional[str] = None
    successor: Optional[str] = None
    description: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        return self.label


class StateChain(BaseModel):
    """Fixed, linear sequence of states.

    The chain is built once from an ordered list of labels and never changes
    afterwards. The first label is the initial state and the last one is the
    terminal state; a single-label chain is both.
    """

    model_config = ConfigDict(frozen=True)

    states: List[StateDefinition]
    _index: Dict[str, StateDefinition] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_links(self) -> "StateChain":
        if not self.states:
            raise ChainDefinitionError("A chain needs at least one state")
        if len({state.label for state in self.states}) != len(self.states):
            raise ChainDefinitionError("State labels must be unique")
        last = len(self.states) - 1
        for i, state in enumerate(self.states):
            expected_prev = self.states[i - 1].label if i > 0 else None
            expected_next = self.states[i + 1].label if i < last else None
            if (
                state.predecessor != expected_prev
                or state.successor != expected_next
                or state.is_initial != (i == 0)
                or state.is_terminal != (i == last)
            ):
                raise ChainDefinitionError(
                    f"State {state.label} is not linked as a linear chain"
                )
        return self

    def model_post_init(self, context: Any) -> None:
        self._index = {state.label: state for state in self.states}

    @classmethod
    def from_labels(
        cls,
        labels: Iterable[str],
        descriptions: Optional[Mapping[str, str]] = None,
    ) -> "StateChain":
        """Build a chain from ``labels`` in order."""
        ordered = [str(label.value if isinstance(label, Enum) else label) for label in labels]
        if not ordered:
            raise ChainDefinitionError("A chain needs at least one state")
        seen: set[str] = set()
        for label in ordered:
            if not label.strip():
                raise ChainDefinitionError("State labels must be non-empty")
            if label in seen:
                raise ChainDefinitionError(f"Duplicate state label: {label}")
            seen.add(label)

        descriptions = descriptions or {}
        last = len(ordered) - 1
        states = [
            StateDefinition(
                label=label,
                is_initial=i == 0,
                is_terminal=i == last,
                predecessor=ordered[i - 1] if i > 0 else None,
                successor=ordered[i + 1] if i < last else None,
                description=descriptions.get(label),
            )
            for i, label in enumerate(ordered)
        ]
        return cls(states=states)

    @property
    def labels(self) -> List[str]:
        return [state.label for state in self.states]

    @property
    def initial(self) -> StateDefinition:
        return self.states[0]

    @property
    def terminal(self) -> StateDefinition:
        return self.states[-1]

    def get(self, label: str) -> StateDefinition:
        """Return the state called ``label``.

        Raises:
            KeyError: If the label is not part of this chain.
        """
        try:
            return self._index[label]
        except KeyError:
            raise KeyError(f"Unknown state: {label}") from None

    def successor_of(self, state: StateDefinition) -> Optional[StateDefinition]:
        return self._index[state.successor] if state.successor else None

    def predecessor_of(self, state: StateDefinition) -> Optional[StateDefinition]:
        return self._index[state.predecessor] if state.predecessor else None

    def __contains__(self, item: object) -> bool:
        if isinstance(item, StateDefinition):
            return self._index.get(item.label) == item
        if isinstance(item, Enum):
            item = item.value
        return isinstance(item, str) and item in self._index

    def __iter__(self) -> Iterator[StateDefinition]:  # type: ignore[override]
        return iter(self.states)

    def __len__(self) -> int:
        return len(self.states)


def order_chain() -> StateChain:
    """Return the four-stage order lifecycle chain."""
    return StateChain.from_labels(list(OrderState), descriptions=ORDER_DESCRIPTIONS)
