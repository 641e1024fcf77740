"""Entry points: build a blueprint run, and drive one with canned inputs."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from loguru import logger

from blueprint.driver import Blueprint, Driver, is_blueprint
from blueprint.errors import EventAlreadySetError, InputExhaustedError
from blueprint.events import Input, Output, Return, SuspensionReason
from blueprint.handle import Handle
from blueprint.slot import Slot

I = TypeVar("I")  # noqa: E741
O = TypeVar("O")  # noqa: E741
R = TypeVar("R")


def run(blueprint: Callable[[Handle[I, O]], Blueprint[R]]) -> Driver[I, O, R]:
    """Start a blueprint and return its event sequence.

    ``blueprint`` is called once with a fresh ``Handle`` and must return a
    coroutine (``async def``) or a generator. Nothing inside it runs until the
    first event is pulled.

    Usage:
        async def body(handle):
            number = await handle.want_input()
            await handle.provide_output(str(number))
            return "alles gut"

        for event in run(body):
            match event:
                case Input(responder):
                    responder.provide(42)
                case Output(text):
                    print(text)
                case Return(result):
                    print(result)

    Raises:
        TypeError: ``blueprint`` is not callable or did not return a coroutine
            or generator.
    """
    if not callable(blueprint):
        raise TypeError(f"run() expects a callable, got {type(blueprint).__name__}")

    events: Slot[SuspensionReason] = Slot(occupied_error=EventAlreadySetError)
    handle: Handle[I, O] = Handle(events)
    body = blueprint(handle)
    if not is_blueprint(body):
        raise TypeError(
            f"{getattr(blueprint, '__qualname__', blueprint)!r} returned "
            f"{type(body).__name__}; expected a coroutine or generator"
        )
    logger.bind(component="run").debug(
        "starting blueprint {}", getattr(blueprint, "__qualname__", repr(blueprint))
    )
    return Driver(body, events)


@dataclass
class Transcript(Generic[O, R]):
    """Everything a blueprint emitted during ``drive``.

    ``completed`` is False when the sequence ended without a ``Return`` (it was
    closed, stalled or already consumed); ``result`` is meaningless then.
    """

    outputs: list[O] = field(default_factory=list)
    result: R | None = None
    inputs_used: int = 0
    completed: bool = False


def drive(events: Iterable[Any], inputs: Iterable[Any] = ()) -> Transcript[Any, Any]:
    """Run an event sequence to completion, answering each ``Input`` from ``inputs``.

    Raises:
        InputExhaustedError: the blueprint asked for more inputs than supplied.
    """
    supply = iter(inputs)
    transcript: Transcript[Any, Any] = Transcript()
    for event in events:
        if isinstance(event, Input):
            try:
                value = next(supply)
            except StopIteration:
                close = getattr(events, "close", None)
                if close is not None:
                    close()
                raise InputExhaustedError(transcript.inputs_used) from None
            transcript.inputs_used += 1
            event.responder.provide(value)
        elif isinstance(event, Output):
            transcript.outputs.append(event.value)
        elif isinstance(event, Return):
            transcript.result = event.value
            transcript.completed = True
    return transcript


__all__ = ["Transcript", "drive", "run"]
