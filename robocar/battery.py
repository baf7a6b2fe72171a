"""Battery capacity configuration command."""

from __future__ import annotations

import re

from robocar.vehiclestate import VehicleState

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _scan_int(text: str) -> int | None:
    """Read a leading decimal integer as scanf's %d would, or None if there is none."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else None


class BatteryManager:
    """Handles the command that sets the battery capacity chosen by the user."""

    def __init__(self, state: VehicleState) -> None:
        self.state = state

    def capacity_command(self, message: str) -> str:
        """Store the capacity in mAh given in ``message`` and return the reply text."""
        value = _scan_int(message)
        if value is None:
            return "syntax error"
        self.state.battery_mamps_user = value & 0xFFFF
        return "ack"