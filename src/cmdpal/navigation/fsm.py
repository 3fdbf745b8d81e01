"""Selection lifecycle state machine for the palette result list.

The controller owns one instance and drives it whenever the result count
changes. Only the empty/active distinction lives here; the selected
index itself is plain data on the controller.
"""

from __future__ import annotations

from statemachine import State, StateMachine


class SelectionLifecycleSM(StateMachine):
    """Two-state lifecycle of a selection.

    States:
        empty  -- No results; navigation commands are ignored.
        active -- At least one result; exactly one of them is selected.
    """

    empty = State("empty", initial=True, value="empty")
    active = State("active", value="active")

    populate = empty.to(active) | active.to.itself()
    drain = active.to(empty) | empty.to.itself()


def create_fsm(current_state: str = "empty") -> SelectionLifecycleSM:
    """Create a state machine positioned at *current_state*.

    Args:
        current_state: ``"empty"`` or ``"active"``.
    """
    return SelectionLifecycleSM(start_value=current_state)
