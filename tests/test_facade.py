"""Workflow facade tests."""

import pytest

from waypoint import OrderState, WorkflowFacade, WorkflowOperationError, order_chain


def test_facade_status_reports_state_and_pending_checkpoints():
    facade = WorkflowFacade.start(order_chain(), payload={"item": "book"})

    status = facade.status()
    assert status.operation == "status"
    assert status.ok
    assert status.state == OrderState.NEW.value
    assert status.pending_checkpoints == 0

    facade.checkpoint()
    facade.checkpoint()
    assert facade.status().pending_checkpoints == 2


def test_facade_combines_transitions_and_checkpoints():
    facade = WorkflowFacade.start(order_chain(), payload={"item": "book"})

    saved = facade.checkpoint()
    assert saved.ok
    assert saved.snapshot.sequence_number == 1

    facade.update(item="lamp")
    advanced = facade.advance()
    assert advanced.ok
    assert advanced.state == "Processing"
    assert advanced.pending_checkpoints == 1

    restored = facade.undo()
    assert restored.ok
    assert restored.snapshot.sequence_number == 1
    assert restored.state == "Processing"
    assert restored.pending_checkpoints == 0
    assert facade.payload == {"item": "book"}


def test_facade_reports_errors_as_results():
    facade = WorkflowFacade.start(order_chain())

    reverted = facade.revert()
    assert not reverted.ok
    assert reverted.operation == "revert"
    assert reverted.error.code == "initial_state"

    undone = facade.undo()
    assert not undone.ok
    assert undone.snapshot is None
    assert undone.error.code == "empty_history"

    for _ in range(3):
        facade.advance()
    refused = facade.advance()
    assert refused.error.code == "terminal_state"
    assert refused.state == "Delivered"


def test_describe_uses_state_description():
    facade = WorkflowFacade.start(order_chain())
    assert facade.describe() == "Order is in NEW state."

    facade.advance()
    assert facade.describe() == "Order is PROCESSING."


def test_bounded_history_through_facade():
    facade = WorkflowFacade.start(order_chain(), history_depth=1)
    facade.checkpoint()
    facade.checkpoint()

    assert facade.status().pending_checkpoints == 1
    assert facade.undo().snapshot.sequence_number == 2
    assert not facade.undo().ok


def test_operation_result_unwrap():
    facade = WorkflowFacade.start(order_chain())

    assert facade.advance().unwrap().state == "Processing"
    with pytest.raises(WorkflowOperationError, match="No checkpoints to undo."):
        facade.undo().unwrap()
