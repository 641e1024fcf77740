"""Single-value rendezvous cell and the single-use Responder built on top of it."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from blueprint.errors import ResponderConsumedError, SlotOccupiedError

T = TypeVar("T")


class _Empty:
    __slots__ = ()

    def __repr__(self) -> str:
        return "EMPTY"

    def __bool__(self) -> bool:
        return False


EMPTY: Any = _Empty()
"""Returned by ``Slot.take`` when nothing is stored (``None`` is a legal value)."""


class Slot(Generic[T]):
    """Capacity-one exchange cell shared by exactly two parties.

    The writer may only ``put`` while the slot is empty; the reader removes the
    value with ``take``. Writing into a full slot is a contract violation and
    raises ``SlotOccupiedError`` (or ``occupied_error`` when given). The first
    such error stays on ``violation`` even if the writer catches it.
    """

    __slots__ = ("_value", "_occupied_error", "_violation")

    def __init__(self, occupied_error: type[SlotOccupiedError] = SlotOccupiedError) -> None:
        self._value: Any = EMPTY
        self._occupied_error = occupied_error
        self._violation: SlotOccupiedError | None = None

    @property
    def is_empty(self) -> bool:
        return self._value is EMPTY

    @property
    def violation(self) -> SlotOccupiedError | None:
        return self._violation

    def put(self, value: T) -> None:
        if self._value is not EMPTY:
            error = self._occupied_error(self._value)
            if self._violation is None:
                self._violation = error
            raise error
        self._value = value

    def take(self) -> T | Any:
        value, self._value = self._value, EMPTY
        return value

    def peek(self) -> T | Any:
        return self._value

    def __repr__(self) -> str:
        return f"Slot({self._value!r})"


class Responder(Generic[T]):
    """Single-use capability that supplies the value a blueprint is waiting for.

    Handed to the driving code inside an ``Input`` event. ``provide`` deposits
    the value and consumes the responder; any further use raises
    ``ResponderConsumedError``.

    Example:
        for event in run(body):
            if isinstance(event, Input):
                event.responder.provide(42)
    """

    __slots__ = ("_holder", "_consumed")

    def __init__(self, holder: Slot[T]) -> None:
        self._holder = holder
        self._consumed = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def provide(self, data: T) -> None:
        if self._consumed:
            raise ResponderConsumedError(self)
        self._consumed = True
        self._holder.put(data)
        # Drop the reference so the private slot lives only as long as the waiter.
        self._holder = None  # type: ignore[assignment]

    def resume(self) -> None:
        """Unblock a waiter that expects no payload (``provide(None)``)."""
        self.provide(None)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else "pending"
        return f"Responder<{state}>"


__all__ = ["EMPTY", "Responder", "Slot"]
