"""Shared fixtures for the blueprint test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from loguru import logger

from blueprint import Handle


async def stringify_blueprint(handle: Handle[int, str]) -> str:
    value = await handle.want_input()
    await handle.provide_output(str(value))
    return "alles gut"


def stringify_generator(handle: Handle[int, str]):
    value = yield from handle.want_input()
    yield from handle.provide_output(str(value))
    return "alles gut"


@pytest.fixture(params=[stringify_blueprint, stringify_generator], ids=["coroutine", "generator"])
def stringify(request):
    """The request/convert/emit/return blueprint in both supported styles."""
    return request.param


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect blueprint log records emitted during a test."""
    messages: list[str] = []
    logger.enable("blueprint")
    handler_id = logger.add(
        lambda message: messages.append(f"{message.record['level'].name}: {message.record['message']}"),
        level="TRACE",
    )
    try:
        yield messages
    finally:
        logger.remove(handler_id)
        logger.disable("blueprint")
