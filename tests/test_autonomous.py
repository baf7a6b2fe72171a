import pytest

from robocar.autonomous import Autonomous, Phase
from robocar.speeding import NEUTRAL_PULSE_US, SpeedingMotor
from robocar.steering import CENTER_PULSE_US, SteeringMotor


class FakePort:
    def __init__(self):
        self.written = []

    def write(self, data):
        self.written.append(bytes(data))


@pytest.fixture
def rig():
    speed = SpeedingMotor()
    steer = SteeringMotor(startup_delay=0)
    port = FakePort()
    return Autonomous(100, speed, steer, port), speed, steer, port


def run_times(auto, count):
    for _ in range(count):
        auto.run()


def test_idle_does_nothing(rig):
    auto, speed, steer, port = rig
    run_times(auto, 5)
    assert auto.phase is Phase.IDLE
    assert port.written == []
    assert speed.pwm.pulse_width == NEUTRAL_PULSE_US


def test_start_reply(rig):
    auto, *_ = rig
    assert auto.start_command("1") == "Maneuver Started"
    assert auto.phase is Phase.FORWARD


def test_first_phase_message_and_motion(rig):
    auto, speed, steer, port = rig
    auto.start_command("1")
    auto.run()
    assert port.written == [b"@debug:Phase 1 - Forward;;\r\n"]
    assert speed.pwm.pulse_width != NEUTRAL_PULSE_US
    assert steer.pwm.pulse_width == CENTER_PULSE_US
    auto.run()
    assert len(port.written) == 1


def test_phase_transitions(rig):
    auto, *_ = rig
    auto.start_command("1")
    run_times(auto, 19)
    assert auto.phase is Phase.FORWARD
    auto.run()
    assert auto.phase is Phase.STOP
    run_times(auto, 5)
    assert auto.phase is Phase.TURN_LEFT
    run_times(auto, 15)
    assert auto.phase is Phase.REVERSE
    run_times(auto, 15)
    assert auto.phase is Phase.EXIT
    run_times(auto, 10)
    assert auto.phase is Phase.IDLE


def test_full_manoeuvre_messages(rig):
    auto, speed, steer, port = rig
    auto.start_command("1")
    run_times(auto, 100)
    assert port.written == [
        b"@debug:Phase 1 - Forward;;\r\n",
        b"@debug:Phase 2 - Stopping;;\r\n",
        b"@debug:Phase 3 - Turn Left;;\r\n",
        b"@debug:Phase 4 - Reverse;;\r\n",
        b"@debug:Phase 5 - Exit;;\r\n",
        b"@debug:Maneuver Complete;;\r\n",
    ]
    assert speed.pwm.pulse_width == NEUTRAL_PULSE_US
    assert steer.pwm.pulse_width == CENTER_PULSE_US


def test_turn_and_reverse_steer_opposite(rig):
    auto, speed, steer, port = rig
    auto.start_command("1")
    run_times(auto, 26)
    assert auto.phase is Phase.TURN_LEFT
    left = steer.pwm.pulse_width
    forward = speed.pwm.pulse_width
    run_times(auto, 15)
    assert auto.phase is Phase.REVERSE
    assert left < CENTER_PULSE_US < steer.pwm.pulse_width
    assert (forward - NEUTRAL_PULSE_US) * (speed.pwm.pulse_width - NEUTRAL_PULSE_US) < 0


def test_stop_phase_neutral(rig):
    auto, speed, *_ = rig
    auto.start_command("1")
    run_times(auto, 21)
    assert auto.phase is Phase.STOP
    assert speed.pwm.pulse_width == NEUTRAL_PULSE_US


def test_restart_mid_manoeuvre(rig):
    auto, _, _, port = rig
    auto.start_command("1")
    run_times(auto, 30)
    auto.start_command("1")
    assert auto.phase is Phase.FORWARD
    assert auto.elapsed_ms == 0
    auto.run()
    assert port.written[-1] == b"@debug:Phase 1 - Forward;;\r\n"


def test_constructor_stops_motor():
    speed = SpeedingMotor()
    speed.set_speed(200)
    Autonomous(100, speed, SteeringMotor(startup_delay=0), FakePort())
    assert speed.pwm.pulse_width == NEUTRAL_PULSE_US


def test_invalid_period():
    with pytest.raises(ValueError):
        Autonomous(0, SpeedingMotor(), SteeringMotor(startup_delay=0), FakePort())