"""
Suspension reasons and the events they become.

A suspension reason is what a blueprint leaves in the shared slot when it
stops; the driver converts it into the matching consumer-facing event.
``Return`` has no suspension counterpart: it is produced only on completion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

from blueprint.slot import Responder
from blueprint.utils import CreationContext

I = TypeVar("I")  # noqa: E741
O = TypeVar("O")  # noqa: E741
R = TypeVar("R")


@dataclass(frozen=True)
class Input(Generic[I]):
    """The blueprint waits for a value; answer it through ``responder``."""

    responder: Responder[I]

    def provide(self, data: I) -> None:
        self.responder.provide(data)

    def resume(self) -> None:
        self.responder.resume()


@dataclass(frozen=True)
class Output(Generic[O]):
    """The blueprint published ``value`` and checkpoints until the next pull."""

    value: O


@dataclass(frozen=True)
class Return(Generic[R]):
    """The blueprint finished with ``value``. Always the last event."""

    value: R


Event = Union[Input[Any], Output[Any], Return[Any]]


@dataclass(frozen=True)
class RequestInput(Generic[I]):
    responder: Responder[I]
    created_at: CreationContext | None = field(default=None, compare=False)

    def to_event(self) -> Input[I]:
        return Input(self.responder)


@dataclass(frozen=True)
class EmitOutput(Generic[O]):
    value: O
    created_at: CreationContext | None = field(default=None, compare=False)

    def to_event(self) -> Output[O]:
        return Output(self.value)


SuspensionReason = Union[RequestInput[Any], EmitOutput[Any]]


__all__ = [
    "EmitOutput",
    "Event",
    "Input",
    "Output",
    "RequestInput",
    "Return",
    "SuspensionReason",
]
