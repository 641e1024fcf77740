"""
Suspension points available to a blueprint.

A blueprint receives a ``Handle`` and calls its two operations from its own
control flow. Both register a suspension reason in the slot shared with the
driver *when called*, and return an awaitable that hands control back to the
driver. The awaitables work with ``await`` in ``async def`` blueprints and with
``yield from`` in generator blueprints::

    async def body(handle: Handle[int, str]) -> str:
        number = await handle.want_input()
        await handle.provide_output(str(number))
        return "done"

    def body(handle: Handle[int, str]):
        number = yield from handle.want_input()
        yield from handle.provide_output(str(number))
        return "done"
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any, Generic, TypeVar

from loguru import logger

from blueprint.events import EmitOutput, RequestInput, SuspensionReason
from blueprint.slot import EMPTY, Responder, Slot
from blueprint.utils import capture_creation_context

I = TypeVar("I")  # noqa: E741
O = TypeVar("O")  # noqa: E741

log = logger.bind(component="handle")


class _Suspend:
    __slots__ = ()

    def __repr__(self) -> str:
        return "SUSPEND"


SUSPEND: Any = _Suspend()
"""The only value a blueprint may yield to its driver."""


class WantInput(Generic[I]):
    """Awaitable that completes with the value delivered through its Responder."""

    __slots__ = ("_holder",)

    def __init__(self, holder: Slot[I]) -> None:
        self._holder = holder

    def __await__(self) -> Generator[Any, None, I]:
        while True:
            value = self._holder.take()
            if value is not EMPTY:
                return value
            yield SUSPEND

    __iter__ = __await__


class Pause:
    """Awaitable that gives control back to the driver exactly once."""

    __slots__ = ("_yielded",)

    def __init__(self) -> None:
        self._yielded = False

    def __await__(self) -> Generator[Any, None, None]:
        if not self._yielded:
            self._yielded = True
            yield SUSPEND

    __iter__ = __await__


class Handle(Generic[I, O]):
    """Blueprint-side API: request inputs and publish outputs."""

    __slots__ = ("_events",)

    def __init__(self, events: Slot[SuspensionReason]) -> None:
        self._events = events

    def want_input(self) -> WantInput[I]:
        """Register an input request and return the awaitable that yields the answer.

        Raises:
            EventAlreadySetError: another suspension reason is still pending.
        """
        holder: Slot[I] = Slot()
        responder = Responder(holder)
        self._events.put(RequestInput(responder, created_at=capture_creation_context()))
        log.trace("input requested")
        return WantInput(holder)

    def provide_output(self, output: O) -> Pause:
        """Publish ``output`` and return the awaitable that checkpoints once.

        Raises:
            EventAlreadySetError: another suspension reason is still pending.
        """
        self._events.put(EmitOutput(output, created_at=capture_creation_context()))
        log.trace("output provided: {!r}", output)
        return Pause()


__all__ = ["SUSPEND", "Handle", "Pause", "WantInput"]
