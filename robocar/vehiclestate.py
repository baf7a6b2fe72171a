"""Shared vehicle state read and written by the tasks and command handlers."""

from __future__ import annotations

from dataclasses import dataclass, field


def _zero_readings() -> list[int]:
    return [0] * 11


@dataclass
class VehicleState:
    """Values shared between the power, sensor and motion components."""

    instant_mamps_h: int = 0

    consumption_total_mamps_h: int = 0
    milliseconds_total: int = 0
    range_left_shutdown: int = 0
    current_ema: int = 0

    battery_total_voltage: int = 0
    battery_mamps_user: int = 0
    readings: list[int] = field(default_factory=_zero_readings)

    kl_value: int = 0

    # Filtering parameters: EMA coefficient scaled from 0.025, averaging window.
    alpha_scaled: int = 25
    window_size: int = 10
    index: int = 0

    imu_active: bool = False
    instant_active: bool = False
    battery_active: bool = False
    resource_active: bool = False
    shut_down: bool = False
    warning: bool = False