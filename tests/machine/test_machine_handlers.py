"""Handler protocol: Resume, Pass, abandoning a scope, and handler failures."""

import pytest

from hostfx import (
    GetLineEffect,
    InMemoryHost,
    PutLineEffect,
    UnhandledEffectError,
    do,
    get_line,
    put_line,
    run,
)
from hostfx.machine import Pass, Resume, WithHandler, sync_run


@do
def before_and_after():
    yield put_line("before")
    line = yield get_line()
    yield put_line(f"after {line}")
    return line


class TestResume:

    def test_handler_value_reaches_program(self) -> None:
        def answer(effect, k):
            if isinstance(effect, GetLineEffect):
                return (yield Resume(k, "scripted"))
            yield Pass()

        host = InMemoryHost()
        result = run(before_and_after(), host, handlers=[answer])

        assert result.value == "scripted"
        assert host.stdout == ["before", "after scripted"]
        assert ("get_line", ()) not in host.calls

    def test_code_after_resume_does_not_run(self) -> None:
        trail = []

        def handler(effect, k):
            trail.append("before resume")
            yield Resume(k, None)
            trail.append("after resume")

        result = sync_run(put_line("x"), [handler])

        assert result.is_ok
        assert trail == ["before resume"]

    def test_handler_can_perform_effects_before_resuming(self) -> None:
        def shout(effect, k):
            if isinstance(effect, PutLineEffect):
                yield put_line(effect.line.upper())
                return (yield Resume(k, None))
            yield Pass()

        host = InMemoryHost.from_seed_data(stdin=["quiet"])
        run(before_and_after(), host, handlers=[shout]).unwrap()

        assert host.stdout == ["BEFORE", "AFTER QUIET"]

    def test_stale_continuation_is_rejected(self) -> None:
        saved = []

        def handler(effect, k):
            if saved:
                return (yield Resume(saved[0], "stale"))
            saved.append(k)
            return (yield Resume(k, "first"))

        @do
        def twice():
            first = yield put_line("a")
            second = yield put_line("b")
            return first, second

        result = sync_run(twice(), [handler])

        assert result.is_err
        assert isinstance(result.error, RuntimeError)
        assert "expected" in str(result.error)

    def test_resume_outside_handler_fails(self) -> None:
        @do
        def rogue():
            from hostfx.machine.frames import Continuation

            yield Resume(Continuation(), 1)

        result = sync_run(rogue())

        assert isinstance(result.error, RuntimeError)
        assert "outside of a handler" in str(result.error)


class TestPass:

    def test_pass_reaches_outer_handler(self) -> None:
        seen = []

        def inner(effect, k):
            seen.append(("inner", type(effect).__name__))
            yield Pass()

        host = InMemoryHost()
        run(put_line("hello"), host, handlers=[inner]).unwrap()

        assert seen == [("inner", "PutLineEffect")]
        assert host.stdout == ["hello"]

    def test_pass_from_outermost_is_unhandled(self) -> None:
        def declines(effect, k):
            yield Pass()

        result = sync_run(put_line("nobody"), [declines])

        assert isinstance(result.error, UnhandledEffectError)
        assert isinstance(result.error.effect, PutLineEffect)

    def test_unhandled_message_names_effect_and_location(self) -> None:
        result = sync_run(put_line("nobody"))

        message = str(result.error)
        assert message.startswith("No handler for PutLineEffect")
        assert "test_machine_handlers.py" in message

    def test_handler_does_not_see_its_own_effects(self) -> None:
        calls = []

        def echo(effect, k):
            calls.append(effect)
            if isinstance(effect, PutLineEffect) and not effect.line.startswith(">"):
                yield put_line(f"> {effect.line}")
                return (yield Resume(k, None))
            yield Pass()

        host = InMemoryHost()
        run(put_line("once"), host, handlers=[echo]).unwrap()

        assert len(calls) == 1
        assert host.stdout == ["> once"]


class TestAbandon:

    def test_returning_without_resume_ends_the_handled_scope(self) -> None:
        def abort_on_read(effect, k):
            if isinstance(effect, GetLineEffect):
                return "aborted"
            yield Pass()

        host = InMemoryHost.from_seed_data(stdin=["unused"])
        result = run(before_and_after(), host, handlers=[abort_on_read])

        assert result.value == "aborted"
        assert host.stdout == ["before"]
        assert list(host.stdin) == ["unused"]

    def test_abandoned_scope_runs_finally_blocks(self) -> None:
        cleanup = []

        @do
        def guarded():
            try:
                yield get_line()
            finally:
                cleanup.append("closed")

        def abort(effect, k):
            return "stop"
            yield

        result = sync_run(WithHandler(abort, guarded()))

        assert result.value == "stop"
        assert cleanup == ["closed"]


class TestHandlerErrors:

    def test_handler_exception_is_raised_at_the_yield(self) -> None:
        def refuse(effect, k):
            raise PermissionError("not allowed")
            yield

        @do
        def recovering():
            try:
                yield put_line("x")
            except PermissionError as exc:
                return f"recovered: {exc}"
            return "unreachable"

        result = sync_run(recovering(), [refuse])

        assert result.value == "recovered: not allowed"

    def test_handler_that_is_not_a_generator_fails_the_run(self) -> None:
        def plain(effect, k):
            return None

        result = sync_run(put_line("x"), [plain])

        assert isinstance(result.error, TypeError)

    def test_do_function_handler(self) -> None:
        @do
        def handler(effect, k):
            if isinstance(effect, GetLineEffect):
                return (yield Resume(k, "from do"))
            yield Pass()

        host = InMemoryHost()
        assert run(get_line(), host, handlers=[handler]).unwrap() == "from do"


class TestNesting:

    def test_handlers_are_tried_innermost_first(self) -> None:
        order = []

        def named(name):
            def handler(effect, k):
                order.append(name)
                yield Pass()

            handler.__name__ = name
            return handler

        host = InMemoryHost()
        run(put_line("x"), host, handlers=[named("inner"), named("middle"), named("outer")])

        assert order == ["inner", "middle", "outer"]
        assert host.stdout == ["x"]

    def test_explicit_with_handler_inside_program(self) -> None:
        def constant(effect, k):
            if isinstance(effect, GetLineEffect):
                return (yield Resume(k, "inner value"))
            yield Pass()

        @do
        def program():
            scoped = yield WithHandler(constant, get_line())
            unscoped = yield get_line()
            return scoped, unscoped

        host = InMemoryHost.from_seed_data(stdin=["host value"])
        assert run(program(), host).unwrap() == ("inner value", "host value")

    def test_max_steps(self) -> None:
        from hostfx import StepLimitExceededError, forever

        result = run(forever(put_line("x")), InMemoryHost(), max_steps=50)

        assert isinstance(result.error, StepLimitExceededError)
        assert result.steps == 50

    @pytest.mark.parametrize("count", [1, 3])
    def test_deep_programs_keep_a_constant_stack(self, count) -> None:
        @do
        def many():
            for _ in range(5000 * count):
                yield put_line("x")

        host = InMemoryHost()
        assert run(many(), host).is_ok
        assert len(host.stdout) == 5000 * count
