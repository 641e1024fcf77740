"""
blueprint: write sequential code that asks for inputs and emits outputs, and
drive it from the outside as a pull-based sequence of events.

Logging goes through loguru and is disabled by default; call
``logger.enable("blueprint")`` to see driver activity.
"""

from loguru import logger

from blueprint.driver import Blueprint, Driver, DriverState
from blueprint.errors import (
    BlueprintError,
    EventAlreadySetError,
    InputExhaustedError,
    MissingSuspensionError,
    ResponderConsumedError,
    SlotOccupiedError,
    UnsupportedAwaitError,
)
from blueprint.events import (
    EmitOutput,
    Event,
    Input,
    Output,
    RequestInput,
    Return,
    SuspensionReason,
)
from blueprint.handle import Handle, Pause, WantInput
from blueprint.run import Transcript, drive, run
from blueprint.slot import EMPTY, Responder, Slot

logger.disable("blueprint")

__all__ = [
    # Entry points
    "run",
    "drive",
    "Transcript",
    # Blueprint side
    "Handle",
    "WantInput",
    "Pause",
    # Driver side
    "Blueprint",
    "Driver",
    "DriverState",
    "Event",
    "Input",
    "Output",
    "Return",
    "Responder",
    # Internals
    "EMPTY",
    "Slot",
    "EmitOutput",
    "RequestInput",
    "SuspensionReason",
    # Errors
    "BlueprintError",
    "EventAlreadySetError",
    "InputExhaustedError",
    "MissingSuspensionError",
    "ResponderConsumedError",
    "SlotOccupiedError",
    "UnsupportedAwaitError",
]
