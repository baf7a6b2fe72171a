"""Driver for the steering servo, commanded by PWM pulse width."""

from __future__ import annotations

import time
from collections.abc import Sequence

from robocar.speeding import PwmOutput

CENTER_PULSE_US = 1500
"""Pulse width that holds the wheels straight (7.5 % of a 20 ms period)."""

STARTUP_DELAY_S = 11.0
"""Time to wait after power-on before driving the servo, so reset glitches settle."""

_SCALE = 1000

# Steering references are in tenths of a degree (150 = 15.0 degrees).
STEER_POINTS_POSITIVE: tuple[int, ...] = (0, 150, 200)
STEER_POINTS_NEGATIVE: tuple[int, ...] = (0, -150, -200)

PWM_POINTS_POSITIVE: tuple[int, ...] = (1500, 1801, 1914)
PWM_POINTS_NEGATIVE: tuple[int, ...] = (1500, 1285, 1154)


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _segment(value: int, x0: int, x1: int, y0: int, y1: int) -> int:
    """Fixed-point linear interpolation on one table segment."""
    slope = _tdiv((y1 - y0) * _SCALE, x1 - x0)
    return _tdiv(y0 * _SCALE + slope * (value - x0), _SCALE)


def _pairs(values: Sequence[int]) -> zip:
    return zip(values, values[1:])


def interpolate_pwm(
    angle: int,
    angles_pos: Sequence[int] = STEER_POINTS_POSITIVE,
    angles_neg: Sequence[int] = STEER_POINTS_NEGATIVE,
    pwms_pos: Sequence[int] = PWM_POINTS_POSITIVE,
    pwms_neg: Sequence[int] = PWM_POINTS_NEGATIVE,
) -> int:
    """Map a steering reference to a pulse width using the calibration tables."""
    if angle == 0:
        return pwms_pos[0]
    if angle >= angles_pos[-1]:
        return pwms_pos[-1]
    if angle <= angles_neg[-1]:
        return pwms_neg[-1]

    if angle < 0:
        for (x0, x1), (y0, y1) in zip(_pairs(angles_neg), _pairs(pwms_neg)):
            if angle >= x1:
                return _segment(angle, x0, x1, y0, y1)

    for (x0, x1), (y0, y1) in zip(_pairs(angles_pos), _pairs(pwms_pos)):
        if angle <= x1:
            return _segment(angle, x0, x1, y0, y1)

    return pwms_pos[0]


class SteeringMotor:
    """Sets the steering angle (tenths of a degree) by converting it to a servo pulse width."""

    def __init__(
        self,
        pwm: PwmOutput | None = None,
        lower_limit: int = -250,
        upper_limit: int = 250,
        startup_delay: float = STARTUP_DELAY_S,
    ) -> None:
        if lower_limit > upper_limit:
            raise ValueError("lower limit must not exceed upper limit")
        if startup_delay < 0:
            raise ValueError("startup delay must not be negative")
        self.pwm = pwm if pwm is not None else PwmOutput()
        self._lower_limit = lower_limit
        self._upper_limit = upper_limit
        self.pwm_value = 0
        if startup_delay:
            time.sleep(startup_delay)
        self.pwm.pulsewidth_us(CENTER_PULSE_US)

    @property
    def lower_limit(self) -> int:
        """Lowest accepted steering reference."""
        return self._lower_limit

    @property
    def upper_limit(self) -> int:
        """Highest accepted steering reference."""
        return self._upper_limit

    def set_angle(self, angle: int) -> int:
        """Steer to ``angle`` (positive is right); return the pulse width used."""
        self.pwm_value = interpolate_pwm(angle)
        self.pwm.pulsewidth_us(self.pwm_value)
        return self.pwm_value

    def in_range(self, angle: int) -> int:
        """Clamp ``angle`` to the servo's limits."""
        return min(max(angle, self._lower_limit), self._upper_limit)