from __future__ import annotations

from dataclasses import dataclass

from .actions.base import ShiftAction
from .actions.check_in import CheckInAction
from .actions.check_out import CheckOutAction
from .model import ShiftState


@dataclass
class ShiftActionFactory:
    """Factory Pattern: pick the transition for the worker's current state."""

    def for_state(self, state: ShiftState) -> ShiftAction:
        if state.active is not None:
            return CheckOutAction()
        return CheckInAction()
