"""
Step engine that turns a blueprint into an ordered event sequence.

The driver steps the blueprint with ``send(None)``. There is no event loop and
no waker: every suspension comes from a Handle operation, so the next step
always happens synchronously on the next pull.
"""

from __future__ import annotations

import inspect
from collections.abc import Coroutine, Generator, Iterator
from enum import Enum
from types import TracebackType
from typing import Any, Generic, TypeVar, Union

from loguru import logger

from blueprint.errors import MissingSuspensionError, UnsupportedAwaitError
from blueprint.events import Event, Input, RequestInput, Return, SuspensionReason
from blueprint.handle import SUSPEND
from blueprint.slot import EMPTY, Responder, Slot

I = TypeVar("I")  # noqa: E741
O = TypeVar("O")  # noqa: E741
R = TypeVar("R")

log = logger.bind(component="driver")

Blueprint = Union[Coroutine[Any, Any, R], Generator[Any, Any, R]]


class DriverState(Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    STALLED = "stalled"
    CLOSED = "closed"


def is_blueprint(obj: Any) -> bool:
    return inspect.iscoroutine(obj) or inspect.isgenerator(obj)


class Driver(Generic[I, O, R]):
    """Iterator over the events of one blueprint run.

    Each ``next()`` advances the blueprint to its next suspension point and
    returns ``Input``, ``Output`` or, once finished, ``Return``. The sequence is
    single-pass: after ``Return`` (or a failure, a stall or ``close()``) it is
    exhausted for good.
    """

    def __init__(self, blueprint: Blueprint[R], events: Slot[SuspensionReason]) -> None:
        if not is_blueprint(blueprint):
            raise TypeError(
                f"Blueprint must be a coroutine or generator, got {type(blueprint).__name__}"
            )
        self._blueprint: Blueprint[R] | None = blueprint
        self._events = events
        self._pending: Responder[I] | None = None
        self._state = DriverState.RUNNING
        self._steps = 0

    @property
    def state(self) -> DriverState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state is not DriverState.RUNNING

    def __iter__(self) -> Iterator[Event]:
        return self

    def __next__(self) -> Event:
        blueprint = self._blueprint
        if blueprint is None or self._state is not DriverState.RUNNING:
            raise StopIteration

        if self._pending is not None and not self._pending.consumed:
            log.warning(
                "Input was not provided before pulling step {}; blueprint stays suspended",
                self._steps,
            )
            self._state = DriverState.STALLED
            raise StopIteration
        self._pending = None

        self._steps += 1
        try:
            yielded = blueprint.send(None)
        except StopIteration as stop:
            self._raise_violation(blueprint)
            self._finish(DriverState.COMPLETED)
            log.debug("blueprint completed after {} steps", self._steps)
            return Return(stop.value)
        except BaseException as exc:
            self._finish(DriverState.FAILED)
            violation = self._events.violation
            if violation is not None and violation is not exc:
                raise violation from exc
            raise

        self._raise_violation(blueprint)
        if yielded is not SUSPEND:
            blueprint.close()
            self._finish(DriverState.FAILED)
            raise UnsupportedAwaitError(yielded)

        reason = self._events.take()
        if reason is EMPTY:
            blueprint.close()
            self._finish(DriverState.FAILED)
            raise MissingSuspensionError()

        if isinstance(reason, RequestInput):
            self._pending = reason.responder
        log.trace("step {}: {!r}", self._steps, reason)
        return reason.to_event()

    def _raise_violation(self, blueprint: Blueprint[R]) -> None:
        # A blueprint that catches EventAlreadySetError still fails the run.
        violation = self._events.violation
        if violation is not None:
            blueprint.close()
            self._finish(DriverState.FAILED)
            raise violation

    def _finish(self, state: DriverState) -> None:
        self._state = state
        self._blueprint = None
        self._pending = None

    def close(self) -> None:
        """Abandon the blueprint. Safe to call at any point, any number of times."""
        blueprint = self._blueprint
        if blueprint is None:
            return
        self._finish(DriverState.CLOSED)
        self._events.take()
        blueprint.close()

    def __del__(self) -> None:
        if getattr(self, "_blueprint", None) is not None:
            self.close()

    def __enter__(self) -> Driver[I, O, R]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Driver(state={self._state.value}, steps={self._steps})"


__all__ = ["Blueprint", "Driver", "DriverState", "is_blueprint"]
