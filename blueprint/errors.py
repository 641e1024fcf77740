from __future__ import annotations

from typing import Any


class BlueprintError(RuntimeError):
    """Base class for protocol violations between a blueprint and its driver."""


class SlotOccupiedError(BlueprintError):
    """Raised when a value is deposited into a slot that still holds one."""

    def __init__(self, pending: Any) -> None:
        self.pending = pending
        super().__init__(f"Slot was already set (pending value: {pending!r})")


class EventAlreadySetError(SlotOccupiedError):
    """Raised when a blueprint registers a suspension reason while one is pending."""

    def __init__(self, pending: Any) -> None:
        self.pending = pending
        where = getattr(pending, "created_at", None)
        origin = f" (pending event created at {where})" if where is not None else ""
        BlueprintError.__init__(
            self,
            f"event already set: {pending!r}{origin}\n"
            "Hint: await every `want_input()` / `provide_output()` call before "
            "starting the next one",
        )


class MissingSuspensionError(BlueprintError):
    """Raised when a blueprint suspends without registering why."""

    def __init__(self) -> None:
        super().__init__(
            "Blueprint suspended without registering a suspension reason\n"
            "Hint: each WantInput / Pause awaitable may only be awaited once"
        )


class UnsupportedAwaitError(BlueprintError):
    """Raised when a blueprint waits on something other than a Handle suspension point."""

    def __init__(self, yielded: Any) -> None:
        self.yielded = yielded
        super().__init__(
            "this driver does not support genuine asynchronous waiting "
            f"(blueprint yielded {yielded!r})\n"
            "Hint: only `handle.want_input()` and `handle.provide_output()` may suspend a blueprint"
        )


class ResponderConsumedError(BlueprintError):
    """Raised when a Responder is used after it already supplied its value."""

    def __init__(self, responder: Any) -> None:
        self.responder = responder
        super().__init__(f"{responder!r} was already consumed")


class InputExhaustedError(BlueprintError):
    """Raised by ``drive`` when the blueprint asks for more inputs than were supplied."""

    def __init__(self, supplied: int) -> None:
        self.supplied = supplied
        super().__init__(
            f"Blueprint requested input #{supplied + 1} but only {supplied} were supplied"
        )


__all__ = [
    "BlueprintError",
    "EventAlreadySetError",
    "InputExhaustedError",
    "MissingSuspensionError",
    "ResponderConsumedError",
    "SlotOccupiedError",
    "UnsupportedAwaitError",
]
