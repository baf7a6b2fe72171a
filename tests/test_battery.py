import pytest

from robocar.battery import BatteryManager
from robocar.vehiclestate import VehicleState


@pytest.fixture
def state():
    return VehicleState()


def test_valid_capacity_acknowledged(state):
    manager = BatteryManager(state)
    assert manager.capacity_command("5000") == "ack"
    assert state.battery_mamps_user == 5000


def test_syntax_error_leaves_state(state):
    state.battery_mamps_user = 1200
    manager = BatteryManager(state)
    assert manager.capacity_command("abc") == "syntax error"
    assert state.battery_mamps_user == 1200


def test_empty_message_is_syntax_error(state):
    assert BatteryManager(state).capacity_command("") == "syntax error"


def test_leading_whitespace_and_trailing_text(state):
    manager = BatteryManager(state)
    assert manager.capacity_command("  3300;extra") == "ack"
    assert state.battery_mamps_user == 3300


def test_value_wraps_to_sixteen_bits(state):
    manager = BatteryManager(state)
    assert manager.capacity_command("-1") == "ack"
    assert state.battery_mamps_user == 65535


def test_latest_value_wins(state):
    manager = BatteryManager(state)
    manager.capacity_command("100")
    manager.capacity_command("+250")
    assert state.battery_mamps_user == 250