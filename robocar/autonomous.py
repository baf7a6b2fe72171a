"""Fixed timed manoeuvre: forward, stop, turn left, reverse right, drive away."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol


class Phase(IntEnum):
    """Stages of the manoeuvre."""

    IDLE = 0
    FORWARD = 1
    STOP = 2
    TURN_LEFT = 3
    REVERSE = 4
    EXIT = 5


class _SpeedMotor(Protocol):
    def set_speed(self, speed: int) -> object: ...


class _SteerMotor(Protocol):
    def set_angle(self, angle: int) -> object: ...


class _Port(Protocol):
    def write(self, data: bytes) -> object: ...


@dataclass(frozen=True)
class _Step:
    speed: int
    angle: int | None
    label: str
    duration_ms: int
    next_phase: Phase


_STEPS: dict[Phase, _Step] = {
    Phase.FORWARD: _Step(150, 0, "Phase 1 - Forward", 2000, Phase.STOP),
    Phase.STOP: _Step(0, None, "Phase 2 - Stopping", 500, Phase.TURN_LEFT),
    Phase.TURN_LEFT: _Step(150, -230, "Phase 3 - Turn Left", 1500, Phase.REVERSE),
    Phase.REVERSE: _Step(-150, 230, "Phase 4 - Reverse", 1500, Phase.EXIT),
    Phase.EXIT: _Step(150, 0, "Phase 5 - Exit", 1000, Phase.IDLE),
}

COMPLETE_MESSAGE = b"@debug:Maneuver Complete;;\r\n"
START_REPLY = "Maneuver Started"


class Autonomous:
    """Periodic task that drives the manoeuvre once started by a command."""

    def __init__(
        self,
        period_ms: int,
        speed_motor: _SpeedMotor,
        steer_motor: _SteerMotor,
        port: _Port,
    ) -> None:
        if period_ms <= 0:
            raise ValueError("period must be positive")
        self.period_ms = period_ms
        self.speed_motor = speed_motor
        self.steer_motor = steer_motor
        self.port = port
        self.phase = Phase.IDLE
        self.elapsed_ms = 0
        self.speed_motor.set_speed(0)

    def run(self) -> None:
        """Advance the manoeuvre by one period."""
        if self.phase is Phase.IDLE:
            return
        self.elapsed_ms += self.period_ms
        step = _STEPS[self.phase]

        if step.angle is not None:
            self.steer_motor.set_angle(step.angle)
        self.speed_motor.set_speed(step.speed)

        if self.elapsed_ms == self.period_ms:
            self.port.write(f"@debug:{step.label};;\r\n".encode("ascii"))

        if self.elapsed_ms >= step.duration_ms:
            if step.next_phase is Phase.IDLE:
                self.speed_motor.set_speed(0)
                self.port.write(COMPLETE_MESSAGE)
            self.phase = step.next_phase
            self.elapsed_ms = 0

    def start_command(self, message: str) -> str:
        """Start (or restart) the manoeuvre; return the reply text."""
        self.phase = Phase.FORWARD
        self.elapsed_ms = 0
        return START_REPLY