# robocar

Control logic for a small robot car that a host computer drives over a
serial line. The package uses only the standard library. It does not talk
to any hardware itself. You pass in an object with a `write(bytes)` method
for the serial port. The motor drivers write pulse widths to a
`PwmOutput`, which records them.

## What is inside

- `robocar.ringqueue.RingQueue`: a fixed-capacity FIFO ring buffer.
  - A queue built with capacity N holds at most N - 2 items.
  - `push` returns `False` and drops the item when the queue is full.
  - `extend` returns how many items it accepted.
  - `pop` and `peek` raise `IndexError` on an empty queue.
- `robocar.vehiclestate.VehicleState`: a dataclass holding the state that
  the components share. This includes `kl_value` (the ignition level), the
  `*_active` flags, `shut_down`, `warning`, `battery_mamps_user` and the
  filter parameters.
- `robocar.battery.BatteryManager`: its `capacity_command(message)` reads
  an integer into `state.battery_mamps_user` (kept to 16 bits). It replies
  `"ack"`, or `"syntax error"` when no integer is found.
- `robocar.speeding`: the drive motor.
  - `SpeedingMotor(pwm, lower_limit, upper_limit)` defaults to a new
    `PwmOutput` and limits of -500..500 mm/s.
  - `set_speed(speed)` maps the speed to an ESC pulse width by fixed-point
    interpolation over calibration tables. 0 gives the neutral width of
    1491 µs. It returns the width it used and keeps it in `pwm_value`.
  - `set_brake()` writes the neutral width.
  - `in_range(speed)` clamps the speed to the limits.
  - `PwmOutput` records `period`, `pulse_width` and `duty_cycle`.
  - `interpolate_pwm` exposes the mapping on its own.
- `robocar.steering`: the steering servo.
  - `SteeringMotor(pwm, lower_limit, upper_limit, startup_delay)` takes the
    angle in tenths of a degree. Its limits default to -250..250.
  - The constructor sleeps for `startup_delay` seconds (11 by default), then
    centres the servo at 1500 µs. Pass `0` to skip the wait.
  - `set_angle(angle)` maps the angle to a pulse width and returns it.
  - `in_range(angle)` clamps the angle to the limits.
- `robocar.serialmonitor.SerialMonitor(port, subscribers)` decodes framed
  commands and answers them.
  - `receive(data)` queues incoming characters. The queue holds up to 253
    and drops the rest.
  - Each `run()` call processes one character and returns `False` when
    none was waiting.
  - A frame `#key:value;;` ended by CR or LF is passed to
    `subscribers[key](value)`.
  - A handler's non-empty reply is written back as `@key:reply;;\r\n`.
- `robocar.robotstatemachine.RobotStateMachine(period_ms, port, steering, speeding, state)`
  provides the handlers `speed_command`, `steer_command`, `brake_command`,
  `vcd_command`, `vcd_calib_command`, `steer_limits_command` and
  `alive_command`.
  - Speed, steer, `vcd` and `vcdCalib` require `state.kl_value == 30`.
    Otherwise they reply `"kl 30 is required!!"`.
  - `vcd` takes `speed,steer,time` with the time in deciseconds.
  - `vcdCalib` takes `speed;steer;time` and replies with the two pulse
    widths.
  - `run()` carries out the pending action and writes its report, for
    example `@speed:150;;\r\n`. It also counts down timed moves and stops
    the car when one ends.
- `robocar.autonomous.Autonomous(period_ms, speed_motor, steer_motor, port)`
  runs a fixed manoeuvre on a timer.
  - The steps, named by `Phase`, are: forward 2 s, stop 0.5 s, turn left
    1.5 s, reverse to the right 1.5 s, then drive away 1 s.
  - `start_command(message)` starts the manoeuvre and replies
    `"Maneuver Started"`.
  - Each `run()` advances it by one period and writes `@debug:...` lines
    to the port.

## Protocol

The host sends frames such as:

```
#speed:150;;\r\n
```

Each one gets a reply when the handler returns text:

```
@speed:kl 30 is required!!;;\r\n
```

## Example

```python
from robocar.vehiclestate import VehicleState
from robocar.speeding import PwmOutput, SpeedingMotor
from robocar.steering import SteeringMotor
from robocar.robotstatemachine import RobotStateMachine
from robocar.serialmonitor import SerialMonitor


class Port:
    def write(self, data):
        print(repr(data))


state = VehicleState(kl_value=30)
port = Port()
speed = SpeedingMotor(PwmOutput(), -500, 500)
steer = SteeringMotor(PwmOutput(), -250, 250, 0)
machine = RobotStateMachine(1, port, steer, speed, state)

monitor = SerialMonitor(port, {
    "speed": machine.speed_command,
    "steer": machine.steer_command,
    "alive": machine.alive_command,
})

monitor.receive(b"#alive:1;;\r\n#speed:150;;\r\n")
while monitor.run():
    pass
machine.run()            # writes b'@speed:150;;\r\n'
print(speed.pwm.pulse_width)
```

Call `run()` on the monitor, the state machine and the manoeuvre once per
tick of your own scheduler.

## What it does not do

The package includes only the command handling and the motor logic. It
does not include any of the following:

- a program to run, or a scheduler that ticks the tasks;
- code that opens a real serial port or drives real PWM pins;
- handling of the `kl` ignition command;
- sensor readout, power monitoring or alerts.

Your application has to set `VehicleState.kl_value` itself and call the
`run()` methods on a schedule.

## Tests

```
pip install -e .[test]
pytest
```