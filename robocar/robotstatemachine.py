"""Motion state machine: turns speed, steering, brake and timed-move commands into motor actions."""

from __future__ import annotations

import re
from enum import IntEnum
from typing import Protocol

from robocar.vehiclestate import VehicleState

DECISECONDS_TO_MS = 100

KL_REQUIRED = "kl 30 is required!!"
SYNTAX_ERROR = "syntax error"
CALIB_ERROR = "something went wrong"

_INT = re.compile(r"[+-]?\d+")


class Mode(IntEnum):
    """What the next run of the state machine does."""

    IDLE = 0
    SPEED = 1
    STEER = 2
    BRAKE = 3
    TIMED_MOVE = 4


class _Port(Protocol):
    def write(self, data: bytes) -> object: ...


class _Steering(Protocol):
    pwm_value: int

    @property
    def lower_limit(self) -> int: ...

    @property
    def upper_limit(self) -> int: ...

    def set_angle(self, angle: int) -> object: ...

    def in_range(self, angle: int) -> int: ...


class _Speeding(Protocol):
    pwm_value: int

    def set_speed(self, speed: int) -> object: ...

    def set_brake(self) -> object: ...

    def in_range(self, speed: int) -> int: ...


def _scan_ints(text: str, separator: str, count: int) -> tuple[list[int], int]:
    """Read up to ``count`` integers joined by ``separator``, as scanf would.

    Returns the values read and scanf's result: the number of conversions,
    or -1 when the input ends before the first one.
    """
    values: list[int] = []
    pos = 0
    for position in range(count):
        if position:
            if text.startswith(separator, pos):
                pos += len(separator)
            else:
                break
        while pos < len(text) and text[pos].isspace():
            pos += 1
        if pos >= len(text):
            if not values:
                return values, -1
            break
        match = _INT.match(text, pos)
        if match is None:
            break
        values.append(int(match.group()))
        pos = match.end()
    return values, len(values)


def _scan_int(text: str) -> int | None:
    values, _ = _scan_ints(text, "", 1)
    return values[0] if values else None


class RobotStateMachine:
    """Periodic task controlling the steering servo and drive motor from serial commands."""

    def __init__(
        self,
        period_ms: int,
        port: _Port,
        steering: _Steering,
        speeding: _Speeding,
        state: VehicleState | None = None,
    ) -> None:
        if period_ms <= 0:
            raise ValueError("period must be positive")
        self.period_ms = period_ms
        self.port = port
        self.steering = steering
        self.speeding = speeding
        self.state = state if state is not None else VehicleState()
        self.mode = Mode.IDLE
        self.elapsed_ms = 0
        self.target_ms = 0
        self.speed = 0
        self.angle = 0
        self.calibrating = False

    def run(self) -> None:
        """Carry out the pending action, or advance a timed move by one period."""
        if self.mode is Mode.SPEED:
            self.speeding.set_speed(self.speed)
            self.port.write(f"@speed:{self.speed};;\r\n".encode("ascii"))
            self.mode = Mode.IDLE
        elif self.mode is Mode.STEER:
            self.steering.set_angle(self.angle)
            self.port.write(f"@steer:{self.angle};;\r\n".encode("ascii"))
            self.mode = Mode.IDLE
        elif self.mode is Mode.BRAKE:
            self.steering.set_angle(self.angle)
            self.speeding.set_brake()
            self.port.write(b"@brake:1;;\r\n")
            self.mode = Mode.IDLE
        elif self.mode is Mode.TIMED_MOVE:
            if self.elapsed_ms >= self.target_ms + self.period_ms:
                self.speeding.set_speed(0)
                self.steering.set_angle(0)
                self.mode = Mode.IDLE
                if self.calibrating:
                    self.port.write(b"@vcdCalib:0;0;;\r\n")
                    self.calibrating = False
                else:
                    self.port.write(b"@vcd:0;0;0;;\r\n")
            else:
                self.elapsed_ms += self.period_ms

    def _kl30(self) -> bool:
        return self.state.kl_value == 30

    def speed_command(self, message: str) -> str:
        """Request a drive speed in mm/s; the value is clamped to the motor's limits."""
        value = _scan_int(message)
        if value is None:
            return SYNTAX_ERROR
        if not self._kl30():
            return KL_REQUIRED
        self.mode = Mode.SPEED
        self.speed = self.speeding.in_range(value)
        return ""

    def steer_command(self, message: str) -> str:
        """Request a steering angle; the value is clamped to the servo's limits."""
        value = _scan_int(message)
        if value is None:
            return SYNTAX_ERROR
        if not self._kl30():
            return KL_REQUIRED
        self.mode = Mode.STEER
        self.angle = self.steering.in_range(value)
        return ""

    def brake_command(self, message: str) -> str:
        """Request braking with the wheels set to the given angle."""
        value = _scan_int(message)
        if value is None:
            return SYNTAX_ERROR
        self.mode = Mode.BRAKE
        self.angle = self.steering.in_range(value)
        return ""

    def vcd_command(self, message: str) -> str:
        """Drive at a speed and angle for a time in deciseconds: ``speed,steer,time``."""
        values, parsed = _scan_ints(message, ",", 3)
        if not self._kl30():
            return KL_REQUIRED
        if parsed == 3:
            speed, angle, duration = values
            if -500 <= speed <= 500 and -232 <= angle <= 232 and 0 <= duration <= 255:
                self.elapsed_ms = 0
                self.target_ms = duration * DECISECONDS_TO_MS
                self.mode = Mode.TIMED_MOVE
                self.steering.set_angle(angle)
                self.speeding.set_speed(speed)
                return f"{speed},{angle},{duration}"
        return f"Err! Parsed:{parsed} Str:'{message}'"

    def vcd_calib_command(self, message: str) -> str:
        """Timed move for calibration: ``speed;steer;time``; replies with the pulse widths."""
        values, parsed = _scan_ints(message, ";", 3)
        if not self._kl30():
            return KL_REQUIRED
        if parsed == 3:
            speed, angle, raw_duration = values
            duration = raw_duration & 0xFF
            self.target_ms = duration
            if -501 < speed < 501 and -273 < angle < 273:
                self.elapsed_ms = 0
                self.target_ms = duration * DECISECONDS_TO_MS
                self.mode = Mode.TIMED_MOVE
                self.steering.set_angle(angle)
                self.speeding.set_speed(speed)
                self.calibrating = True
                return f"{self.speeding.pwm_value};{self.steering.pwm_value}"
        return CALIB_ERROR

    def steer_limits_command(self, message: str) -> str:
        """Reply with the steering limits as ``lower;upper``."""
        return f"{self.steering.lower_limit};{self.steering.upper_limit}"

    def alive_command(self, message: str) -> str:
        """Reply that the controller is alive."""
        return "1"