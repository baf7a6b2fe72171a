"""Serial command handling, motor drivers and manoeuvre state machines for a robot car."""

__version__ = "0.1.0"