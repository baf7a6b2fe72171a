from unittest import mock

import pytest

from robocar.speeding import PwmOutput
from robocar.steering import (
    CENTER_PULSE_US,
    PWM_POINTS_NEGATIVE,
    PWM_POINTS_POSITIVE,
    STEER_POINTS_NEGATIVE,
    STEER_POINTS_POSITIVE,
    SteeringMotor,
    interpolate_pwm,
)


@pytest.fixture
def motor():
    return SteeringMotor(PwmOutput(), -250, 250, startup_delay=0)


def test_constructor_centers_servo():
    pwm = PwmOutput()
    SteeringMotor(pwm, -250, 250, startup_delay=0)
    assert pwm.pulse_width == 1500


def test_constructor_waits_startup_delay():
    with mock.patch("robocar.steering.time.sleep") as sleep:
        motor = SteeringMotor(PwmOutput(), -250, 250, startup_delay=11.0)
    sleep.assert_called_once_with(11.0)
    assert motor.pwm.pulse_width == CENTER_PULSE_US


def test_zero_delay_does_not_sleep():
    with mock.patch("robocar.steering.time.sleep") as sleep:
        motor = SteeringMotor(PwmOutput(), -250, 250, startup_delay=0)
    assert sleep.call_count == 0
    assert motor.pwm.pulse_width == CENTER_PULSE_US
    assert motor.lower_limit == -250
    assert motor.upper_limit == 250


def test_invalid_limits_rejected():
    with pytest.raises(ValueError):
        SteeringMotor(PwmOutput(), 100, -100, startup_delay=0)


def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        SteeringMotor(PwmOutput(), -250, 250, startup_delay=-1)


def test_beyond_table_saturates(motor):
    assert motor.set_angle(250) == PWM_POINTS_POSITIVE[-1]
    assert motor.set_angle(-250) == PWM_POINTS_NEGATIVE[-1]
    assert motor.set_angle(10_000) == PWM_POINTS_POSITIVE[-1]
    assert motor.set_angle(-10_000) == PWM_POINTS_NEGATIVE[-1]


def test_interpolation_is_monotonic():
    values = [interpolate_pwm(a) for a in range(-220, 221)]
    assert all(a <= b for a, b in zip(values, values[1:]))


@pytest.mark.parametrize("angle", [1, 50, 75, 149, 151, 199])
def test_positive_between_neighbours(angle):
    pwm = interpolate_pwm(angle)
    assert PWM_POINTS_POSITIVE[0] <= pwm <= PWM_POINTS_POSITIVE[-1]
    assert pwm >= CENTER_PULSE_US


@pytest.mark.parametrize("angle", [-1, -50, -75, -149, -151, -199])
def test_negative_between_neighbours(angle):
    pwm = interpolate_pwm(angle)
    assert PWM_POINTS_NEGATIVE[-1] <= pwm <= PWM_POINTS_NEGATIVE[0]
    assert pwm <= CENTER_PULSE_US


def test_in_range_clamps(motor):
    assert motor.in_range(300) == 250
    assert motor.in_range(-300) == -250
    assert motor.in_range(120) == 120
    assert motor.in_range(-250) == -250


def test_limits_exposed(motor):
    assert motor.lower_limit == -250
    assert motor.upper_limit == 250