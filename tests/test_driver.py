import asyncio
import gc
import warnings

import pytest

from blueprint import (
    Driver,
    DriverState,
    EventAlreadySetError,
    Input,
    MissingSuspensionError,
    Output,
    Return,
    UnsupportedAwaitError,
    run,
)


async def no_suspension(handle):
    return 5


async def two_outputs(handle):
    await handle.provide_output("a")
    await handle.provide_output("b")
    return "end"


def test_blueprint_without_suspension_yields_only_return():
    assert list(run(no_suspension)) == [Return(5)]


def test_return_is_last_and_sequence_stays_exhausted():
    events = run(two_outputs)

    assert list(events) == [Output("a"), Output("b"), Return("end")]
    assert events.state is DriverState.COMPLETED
    assert events.done
    with pytest.raises(StopIteration):
        next(events)


def test_events_are_produced_one_per_pull():
    trace: list[str] = []

    async def body(handle):
        trace.append("start")
        await handle.provide_output(1)
        trace.append("after output")
        value = await handle.want_input()
        trace.append(f"got {value}")
        return value

    events = run(body)
    assert trace == []

    assert next(events) == Output(1)
    assert trace == ["start"]

    event = next(events)
    assert isinstance(event, Input)
    assert trace == ["start", "after output"]

    event.provide("v")
    assert next(events) == Return("v")
    assert trace == ["start", "after output", "got v"]


def test_output_checkpoints_before_further_work():
    reached: list[bool] = []

    async def body(handle):
        await handle.provide_output("x")
        reached.append(True)
        return None

    events = run(body)
    assert next(events) == Output("x")
    assert reached == []
    assert next(events) == Return(None)
    assert reached == [True]


def test_blueprint_observes_each_supplied_value():
    async def body(handle):
        seen = []
        for _ in range(3):
            seen.append(await handle.want_input())
        return seen

    supplied = iter(["x", None, 3])
    result = None
    for event in run(body):
        if isinstance(event, Input):
            event.responder.provide(next(supplied))
        elif isinstance(event, Return):
            result = event.value

    assert result == ["x", None, 3]


def test_unit_input_resumes():
    async def body(handle):
        value = await handle.want_input()
        return value is None

    events = run(body)
    next(events).resume()
    assert next(events) == Return(True)


def test_nested_coroutines_share_the_handle():
    async def ask_twice(handle):
        return (await handle.want_input()) + (await handle.want_input())

    async def body(handle):
        total = await ask_twice(handle)
        await handle.provide_output(total)
        return "ok"

    events = run(body)
    next(events).provide(1)
    next(events).provide(2)
    assert list(events) == [Output(3), Return("ok")]


def test_second_pending_reason_fails_the_run():
    async def body(handle):
        handle.provide_output("first")
        await handle.want_input()
        return None

    events = run(body)
    with pytest.raises(EventAlreadySetError, match="event already set"):
        next(events)
    assert events.state is DriverState.FAILED
    with pytest.raises(StopIteration):
        next(events)


def test_awaiting_a_finished_input_twice_is_detected():
    async def body(handle):
        request = handle.want_input()
        await request
        await request
        return None

    events = run(body)
    next(events).provide(1)
    with pytest.raises(MissingSuspensionError):
        next(events)
    assert events.state is DriverState.FAILED


def test_genuine_async_wait_is_rejected():
    async def body(handle):
        await asyncio.sleep(0)
        return None

    events = run(body)
    with pytest.raises(UnsupportedAwaitError, match="genuine asynchronous waiting"):
        next(events)
    assert events.state is DriverState.FAILED


def test_plain_yield_in_generator_is_rejected():
    def body(handle):
        yield "not a suspension point"
        return None

    with pytest.raises(UnsupportedAwaitError) as exc_info:
        next(run(body))
    assert exc_info.value.yielded == "not a suspension point"


def test_blueprint_exception_propagates():
    async def body(handle):
        await handle.provide_output(1)
        raise ValueError("boom")

    events = run(body)
    assert next(events) == Output(1)
    with pytest.raises(ValueError, match="boom"):
        next(events)
    assert events.state is DriverState.FAILED


def test_pulling_without_answering_input_stalls(log_messages):
    async def body(handle):
        await handle.want_input()
        return "unreachable"

    events = run(body)
    assert isinstance(next(events), Input)

    assert list(events) == []
    assert events.state is DriverState.STALLED
    assert any(message.startswith("WARNING") for message in log_messages)


def test_discarding_after_input_is_silent():
    cleaned_up: list[bool] = []

    async def body(handle):
        try:
            await handle.want_input()
        finally:
            cleaned_up.append(True)
        return None

    events = run(body)
    assert isinstance(next(events), Input)

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        del events
        gc.collect()

    assert cleaned_up == [True]


def test_close_unstarted_coroutine_does_not_warn():
    events = run(no_suspension)

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        events.close()
        events.close()

    assert events.state is DriverState.CLOSED
    assert list(events) == []


def test_context_manager_closes():
    with run(two_outputs) as events:
        assert next(events) == Output("a")

    assert events.state is DriverState.CLOSED
    assert list(events) == []


def test_driver_rejects_non_blueprint():
    with pytest.raises(TypeError, match="coroutine or generator"):
        Driver(object(), None)  # type: ignore[arg-type]


def test_driver_logs_steps(log_messages):
    list(run(two_outputs))

    assert any("completed after 3 steps" in message for message in log_messages)


def test_caught_event_already_set_still_fails_the_run():
    async def body(handle):
        pause = handle.provide_output("a")
        try:
            handle.provide_output("b")
        except EventAlreadySetError:
            pass
        await pause
        return "end"

    events = run(body)
    with pytest.raises(EventAlreadySetError, match="event already set"):
        next(events)
    assert events.state is DriverState.FAILED
    assert list(events) == []


def test_caught_event_already_set_fails_even_on_completion():
    async def body(handle):
        handle.provide_output("a")
        try:
            handle.provide_output("b")
        except Exception:
            pass
        return "end"

    events = run(body)
    with pytest.raises(EventAlreadySetError):
        next(events)
    assert events.state is DriverState.FAILED


def test_discarding_before_first_pull_is_silent():
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        events = run(two_outputs)
        del events
        gc.collect()

    assert [w for w in caught if issubclass(w.category, RuntimeWarning)] == []
