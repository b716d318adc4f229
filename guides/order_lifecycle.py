"""Example walking an order through its lifecycle."""

from waypoint import TransitionEngine, WorkflowContext, order_chain


def main():
    chain = order_chain()
    engine = TransitionEngine(chain)
    order = WorkflowContext.create(chain, payload={"order_id": "ord-1001"})

    print(order.current_state.description)

    # New -> Processing -> Shipped -> Delivered, then one step too far
    for _ in range(4):
        result = engine.advance(order)
        if result.ok:
            print(order.current_state.description)
        else:
            print(f"⚠️  {result.error.message}")

    result = engine.revert(order)
    print(f"Reverted to {result.current}")


if __name__ == "__main__":
    main()
