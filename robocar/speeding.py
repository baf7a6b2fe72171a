"""Driver for the brushless drive motor, commanded through an ESC by PWM pulse width."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

NEUTRAL_PULSE_US = 1491
"""Pulse width that holds the drive motor at standstill (about 7.46 % of 20 ms)."""

PWM_PERIOD_MS = 20

_SCALE = 1000

SPEED_POINTS_POSITIVE: tuple[int, ...] = (
    40, 50, 60, 70, 80, 90, 100, 110, 120, 130,
    140, 150, 160, 170, 180, 190, 200, 210, 220, 260,
    300, 350, 400, 450, 500,
)
SPEED_POINTS_NEGATIVE: tuple[int, ...] = tuple(-s for s in SPEED_POINTS_POSITIVE)

PWM_POINTS_POSITIVE: tuple[int, ...] = (
    1576, 1579, 1582, 1584, 1587, 1590, 1593, 1594, 1594, 1597,
    1600, 1602, 1603, 1606, 1609, 1612, 1611, 1612, 1614, 1621,
    1635, 1638, 1643, 1653, 1661,
)
PWM_POINTS_NEGATIVE: tuple[int, ...] = (
    1405, 1403, 1399, 1397, 1395, 1392, 1389, 1387, 1387, 1384,
    1381, 1380, 1379, 1375, 1372, 1369, 1371, 1369, 1367, 1361,
    1347, 1344, 1339, 1329, 1321,
)


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _segment(value: int, x0: int, x1: int, y0: int, y1: int) -> int:
    """Fixed-point linear interpolation on one table segment."""
    slope = _tdiv((y1 - y0) * _SCALE, x1 - x0)
    return _tdiv(y0 * _SCALE + slope * (value - x0), _SCALE)


@dataclass
class PwmOutput:
    """A PWM output line; records the last period and pulse width written to it."""

    period: int = PWM_PERIOD_MS
    pulse_width: int = 0

    def period_ms(self, period: int) -> None:
        """Set the PWM period in milliseconds."""
        if period <= 0:
            raise ValueError("period must be positive")
        self.period = period

    def pulsewidth_us(self, width: int) -> None:
        """Set the pulse width in microseconds."""
        if width < 0:
            raise ValueError("pulse width must not be negative")
        self.pulse_width = width

    @property
    def duty_cycle(self) -> float:
        """Fraction of the period during which the line is high."""
        return self.pulse_width / (self.period * 1000)


def interpolate_pwm(
    speed: int,
    speeds_pos: Sequence[int] = SPEED_POINTS_POSITIVE,
    speeds_neg: Sequence[int] = SPEED_POINTS_NEGATIVE,
    pwms_pos: Sequence[int] = PWM_POINTS_POSITIVE,
    pwms_neg: Sequence[int] = PWM_POINTS_NEGATIVE,
) -> int:
    """Map a speed reference to a pulse width using the calibration tables."""
    if speed == 0:
        return NEUTRAL_PULSE_US
    if speed >= speeds_pos[-1]:
        return pwms_pos[-1]
    if speed <= speeds_neg[-1]:
        return pwms_neg[-1]

    if speed <= speeds_pos[0]:
        if speed > 0:
            return pwms_pos[0]
        if speed >= speeds_neg[0]:
            return pwms_neg[0]
        for (x0, x1), (y0, y1) in zip(
            zip(speeds_neg, speeds_neg[1:]), zip(pwms_neg, pwms_neg[1:])
        ):
            if speed >= x1:
                return _segment(speed, x0, x1, y0, y1)

    for (x0, x1), (y0, y1) in zip(
        zip(speeds_pos, speeds_pos[1:]), zip(pwms_pos, pwms_pos[1:])
    ):
        if speed <= x1:
            return _segment(speed, x0, x1, y0, y1)

    return NEUTRAL_PULSE_US


class SpeedingMotor:
    """Sets the drive speed (mm/s) by converting it to an ESC pulse width."""

    def __init__(
        self,
        pwm: PwmOutput | None = None,
        lower_limit: int = -500,
        upper_limit: int = 500,
    ) -> None:
        if lower_limit > upper_limit:
            raise ValueError("lower limit must not exceed upper limit")
        self.pwm = pwm if pwm is not None else PwmOutput()
        self._lower_limit = lower_limit
        self._upper_limit = upper_limit
        self.pwm_value = 0
        self.pwm.period_ms(PWM_PERIOD_MS)
        self.pwm.pulsewidth_us(NEUTRAL_PULSE_US)

    @property
    def lower_limit(self) -> int:
        """Lowest accepted speed reference."""
        return self._lower_limit

    @property
    def upper_limit(self) -> int:
        """Highest accepted speed reference."""
        return self._upper_limit

    def set_speed(self, speed: int) -> int:
        """Drive at ``speed`` mm/s (positive is forward); return the pulse width used."""
        self.pwm_value = NEUTRAL_PULSE_US
        if speed != 0:
            # The ESC is wired so that forward travel needs the lower pulse widths.
            self.pwm_value = interpolate_pwm(-speed)
        self.pwm.pulsewidth_us(self.pwm_value)
        return self.pwm_value

    def set_brake(self) -> None:
        """Put the motor into its neutral, braking state."""
        self.pwm.pulsewidth_us(NEUTRAL_PULSE_US)

    def in_range(self, speed: int) -> int:
        """Clamp ``speed`` to the motor's limits."""
        return min(max(speed, self._lower_limit), self._upper_limit)