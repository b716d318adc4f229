"""Example using checkpoints to undo profile edits."""

from waypoint import WorkflowFacade, order_chain


def show(facade):
    print(f"Current State -> Name: {facade.payload.get('name')}, Email: {facade.payload.get('email')}")


def main():
    facade = WorkflowFacade.start(order_chain())

    facade.update(name="John Doe", email="john@example.com")
    facade.checkpoint()
    show(facade)

    facade.update(name="Jane Smith", email="jane@example.com")
    facade.checkpoint()
    show(facade)

    # First undo restores the latest checkpoint, the second goes one further back
    for _ in range(3):
        result = facade.undo()
        if not result.ok:
            print(f"⚠️  {result.error.message}")
            break
        show(facade)

    print(f"📋 Pending checkpoints: {facade.status().pending_checkpoints}")


if __name__ == "__main__":
    main()
