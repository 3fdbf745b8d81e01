"""Keyboard navigation over palette results."""

from cmdpal.navigation.controller import KEY_ACTIONS, NavigationController
from cmdpal.navigation.fsm import SelectionLifecycleSM, create_fsm

__all__ = ["KEY_ACTIONS", "NavigationController", "SelectionLifecycleSM", "create_fsm"]
