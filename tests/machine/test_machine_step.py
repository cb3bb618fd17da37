import logging
from dataclasses import FrozenInstanceError

import pytest

from hostfx import StepLimitExceededError, do, forever, put_line
from hostfx.effects import Pure, PureEffect, pure
from hostfx.machine import (
    MachineState,
    Pass,
    Resume,
    WithHandler,
    debug_sync_run,
    step,
    sync_run,
)
from hostfx.machine.frames import Continuation, DispatchingFrame, ReturnFrame, WithHandlerFrame
from hostfx.machine.state import Done, EffectYield, Error, Failed, ProgramControl, Value
from hostfx.program import GeneratorProgram


def _noop_handler(effect, k):
    yield Pass()


class TestFrames:

    def test_return_frame_is_frozen(self) -> None:
        def gen():
            yield 1

        frame = ReturnFrame(generator=gen())
        with pytest.raises(FrozenInstanceError):
            frame.generator = None  # type: ignore[misc]

    def test_frame_ids_do_not_affect_equality(self) -> None:
        frame1 = WithHandlerFrame(handler=_noop_handler)
        frame2 = WithHandlerFrame(handler=_noop_handler)
        assert frame1.frame_id != frame2.frame_id
        assert frame1 == frame2

    def test_dispatching_frame_advances_handler(self) -> None:
        def other(effect, k):
            yield Pass()

        df = DispatchingFrame(
            effect=put_line("x"),
            handlers=(_noop_handler, other),
            handler_idx=0,
            continuation=Continuation(),
        )

        advanced = df.next_handler()
        assert advanced is not None
        assert advanced.current_handler is other
        assert advanced.continuation is df.continuation
        assert advanced.next_handler() is None

    def test_continuation_repr_tracks_consumption(self) -> None:
        k = Continuation()
        assert "live" in repr(k)
        k.consumed = True
        assert "consumed" in repr(k)


class TestStep:

    def test_value_with_empty_k_is_done(self) -> None:
        assert step(MachineState(C=Value(7), K=[])) == Done(7)

    def test_error_with_empty_k_is_failed(self) -> None:
        error = ValueError("boom")
        result = step(MachineState(C=Error(error), K=[]))
        assert isinstance(result, Failed)
        assert result.error is error

    def test_pure_effect_becomes_value_without_dispatch(self) -> None:
        result = step(MachineState(C=ProgramControl(PureEffect(value=3)), K=[]))
        assert result == MachineState(C=Value(3), K=[])

    def test_generator_program_pushes_return_frame(self) -> None:
        effect = put_line("hi")

        def gen():
            yield effect
            return "done"

        result = step(MachineState(C=ProgramControl(GeneratorProgram(gen)), K=[]))

        assert isinstance(result, MachineState)
        assert result.C == EffectYield(effect)
        assert len(result.K) == 1
        assert isinstance(result.K[0], ReturnFrame)

    def test_value_is_sent_into_return_frame(self) -> None:
        def gen():
            received = yield put_line("x")
            return received * 2

        g = gen()
        next(g)
        result = step(MachineState(C=Value(21), K=[ReturnFrame(g)]))
        assert result == MachineState(C=Value(42), K=[])

    def test_error_is_thrown_into_return_frame(self) -> None:
        def gen():
            try:
                yield put_line("x")
            except ValueError as exc:
                return f"caught {exc}"

        g = gen()
        next(g)
        result = step(MachineState(C=Error(ValueError("bad")), K=[ReturnFrame(g)]))
        assert result == MachineState(C=Value("caught bad"), K=[])

    def test_with_handler_pushes_handler_frame(self) -> None:
        program = PureEffect(value=1)
        result = step(MachineState(C=ProgramControl(WithHandler(_noop_handler, program)), K=[]))

        assert isinstance(result, MachineState)
        assert result.C == ProgramControl(program)
        assert result.K == [WithHandlerFrame(handler=_noop_handler)]

    def test_value_pops_handler_frame(self) -> None:
        result = step(MachineState(C=Value(1), K=[WithHandlerFrame(handler=_noop_handler)]))
        assert result == MachineState(C=Value(1), K=[])

    def test_effect_dispatch_starts_innermost_handler(self) -> None:
        seen = []

        def handler(effect, k):
            seen.append(effect)
            yield Resume(k, None)

        effect = put_line("x")
        result = step(MachineState(C=EffectYield(effect), K=[WithHandlerFrame(handler=handler)]))

        assert isinstance(result, MachineState)
        assert isinstance(result.C, ProgramControl)
        assert isinstance(result.K[0], DispatchingFrame)
        assert result.K[0].effect is effect
        assert result.K[0].current_handler is handler

    def test_yielding_a_non_program_is_a_type_error(self) -> None:
        result = step(MachineState(C=EffectYield("not an effect"), K=[]))

        assert isinstance(result, MachineState)
        assert isinstance(result.C, Error)
        assert isinstance(result.C.error, TypeError)


class TestSyncRun:

    def test_counts_steps(self) -> None:
        result = sync_run(PureEffect(value="v"))
        assert result.value == "v"
        assert result.steps == 2

    def test_program_exception_is_returned(self) -> None:
        @do
        def failing():
            raise RuntimeError("inside")
            yield

        result = sync_run(failing())

        assert result.is_err
        assert isinstance(result.error, RuntimeError)
        with pytest.raises(RuntimeError, match="inside"):
            result.unwrap()

    def test_to_result(self) -> None:
        assert sync_run(PureEffect(value=1)).to_result().unwrap() == 1
        assert sync_run(put_line("x")).to_result().is_err()

    def test_debug_run_logs_transitions(self, caplog) -> None:
        caplog.set_level(logging.INFO, logger="hostfx.machine.run")

        result = debug_sync_run(PureEffect(value="traced"))

        assert result.value == "traced"
        assert "initial: C=ProgramControl(PureEffect)" in caplog.text
        assert "Done('traced')" in caplog.text

    def test_debug_run_step_budget(self) -> None:
        def answer(effect, k):
            yield Resume(k, None)

        result = debug_sync_run(forever(put_line("x")), [answer], max_steps=10)

        assert isinstance(result.error, StepLimitExceededError)

    def test_pure_constructors(self) -> None:
        assert sync_run(pure(1)).value == 1
        assert sync_run(Pure("p")).value == "p"
