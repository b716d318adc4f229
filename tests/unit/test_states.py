"""State chain construction tests."""

import pytest
from pydantic import ValidationError

from waypoint import ChainDefinitionError, OrderState, StateChain, StateDefinition, WorkflowContext, order_chain


def test_order_chain_links():
    chain = order_chain()

    assert chain.labels == ["New", "Processing", "Shipped", "Delivered"]
    assert chain.initial.label == "New" and chain.initial.is_initial
    assert chain.terminal.label == "Delivered" and chain.terminal.is_terminal
    assert [s.label for s in chain if s.is_initial] == ["New"]
    assert [s.label for s in chain if s.is_terminal] == ["Delivered"]

    processing = chain.get("Processing")
    assert processing.predecessor == "New"
    assert processing.successor == "Shipped"
    assert chain.successor_of(chain.terminal) is None
    assert chain.predecessor_of(chain.initial) is None
    assert chain.successor_of(processing).label == "Shipped"


def test_membership_accepts_labels_enums_and_definitions():
    chain = order_chain()

    assert "Shipped" in chain
    assert OrderState.SHIPPED in chain
    assert chain.get("Shipped") in chain
    assert "Cancelled" not in chain
    assert StateDefinition(label="Shipped") not in chain


def test_unknown_label_raises_key_error():
    with pytest.raises(KeyError):
        order_chain().get("Cancelled")


@pytest.mark.parametrize(
    "labels",
    [[], ["A", "A"], ["A", " "]],
)
def test_invalid_label_lists_are_rejected(labels):
    with pytest.raises(ChainDefinitionError):
        StateChain.from_labels(labels)


def test_single_label_chain_is_initial_and_terminal():
    chain = StateChain.from_labels(["Only"])

    assert chain.initial == chain.terminal
    assert chain.initial.is_initial and chain.initial.is_terminal


def test_hand_built_chain_must_be_linear():
    states = [
        StateDefinition(label="A", is_initial=True, successor="C"),
        StateDefinition(label="B", predecessor="A", successor="C"),
        StateDefinition(label="C", is_terminal=True, predecessor="B"),
    ]
    with pytest.raises(ValidationError):
        StateChain(states=states)


def test_context_starts_at_initial_state():
    context = WorkflowContext.create(order_chain(), payload={"id": 7})

    assert context.label == "New"
    assert context.get("id") == 7
    assert context.get("missing", "x") == "x"
    assert len(context.history) == 0
    assert context.context_id


def test_context_rejects_foreign_state():
    context = WorkflowContext.create(order_chain())

    with pytest.raises(ValidationError):
        context.current_state = StateDefinition(label="Cancelled")
    assert context.label == "New"


def test_context_chain_and_history_are_fixed():
    first = WorkflowContext.create(order_chain())
    second = WorkflowContext.create(order_chain())

    with pytest.raises(ValidationError):
        first.chain = StateChain.from_labels(["Draft", "Published"])
    with pytest.raises(ValidationError):
        second.history = first.history
    with pytest.raises(ValidationError):
        first.context_id = "other"

    assert first.current_state in first.chain
    assert second.history is not first.history
