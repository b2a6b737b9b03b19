r"""Unit tests for BackoffRunner."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from unittest.mock import Mock

import pytest

from abackoff.algorithms import FixedBackoffAlgorithm, NoopBackoffAlgorithm
from abackoff.retry import BackoffRunner, BackoffStrategy, RetryDecider

if TYPE_CHECKING:
    from collections.abc import Callable


class TransientError(Exception):
    pass


class FatalError(Exception):
    pass


def create_runner(max_attempts: int | None = 5) -> BackoffRunner:
    return BackoffRunner(BackoffStrategy(NoopBackoffAlgorithm(), max_attempts=max_attempts))


def succeed_on(attempt: int, result: Any = "ok") -> Mock:
    """Create an operation raising TransientError until ``attempt``."""
    side_effect = [TransientError(f"attempt {number}") for number in range(1, attempt)]
    return Mock(side_effect=[*side_effect, result])


def return_values(*values: Any) -> Mock:
    return Mock(side_effect=list(values))


##################################
#     Tests for construction     #
##################################


def test_runner_creation() -> None:
    """Test BackoffRunner default components."""
    strategy = BackoffStrategy(NoopBackoffAlgorithm())
    runner = BackoffRunner(strategy)

    assert runner.strategy is strategy
    assert isinstance(runner.decider, RetryDecider)
    assert runner.callbacks.success_callbacks == []


def test_runner_with_decider() -> None:
    """Test BackoffRunner with a custom decider."""
    decider = RetryDecider()
    runner = BackoffRunner(BackoffStrategy(NoopBackoffAlgorithm()), decider=decider)
    assert runner.decider is decider


def test_runner_configuration_is_fluent() -> None:
    """Test that the configuration methods return the runner."""
    runner = create_runner()
    assert (
        runner.retry_exceptions(TransientError)
        .retry_when(None)
        .exception_callback(Mock())
        .invalid_result_callback(Mock())
        .success_callback(Mock())
        .failure_callback(Mock())
        .fallback_callback(Mock())
        .finally_callback(Mock())
        is runner
    )
    assert len(runner.callbacks.failure_callbacks) == 2


###################################
#     Tests for the happy path    #
###################################


def test_runner_success_first_attempt() -> None:
    """Test that the result of a successful attempt is returned."""
    operation = Mock(return_value=42)
    runner = create_runner()

    assert runner.attempt(operation) == 42
    operation.assert_called_once_with()
    assert len(runner.strategy.logs()) == 1


def test_runner_retries_exceptions() -> None:
    """Test that exceptions are retried until the operation succeeds."""
    operation = succeed_on(3)
    runner = create_runner()

    assert runner.attempt(operation) == "ok"
    assert operation.call_count == 3
    assert [log.attempt_number for log in runner.strategy.logs()] == [1, 2, 3]


def test_runner_sleeps_between_attempts(mock_sleep: Mock) -> None:
    """Test that the delays are waited between the attempts."""
    runner = BackoffRunner(BackoffStrategy(FixedBackoffAlgorithm(1), max_attempts=3))

    assert runner.attempt(succeed_on(3)) == "ok"
    assert mock_sleep.call_count == 2


def test_runner_no_sleep_before_first_attempt(mock_sleep: Mock) -> None:
    """Test that the first attempt is made straight away."""
    runner = BackoffRunner(BackoffStrategy(FixedBackoffAlgorithm(1), max_attempts=3))

    runner.attempt(Mock(return_value=1))
    mock_sleep.assert_not_called()


def test_runner_is_reusable() -> None:
    """Test that each call starts a new run."""
    runner = create_runner(max_attempts=3)

    assert runner.attempt(succeed_on(3)) == "ok"
    assert runner.attempt(succeed_on(2)) == "ok"
    assert len(runner.strategy.logs()) == 2


def test_runner_restores_runs_at_start_of_loop() -> None:
    """Test that the strategy settings are left as they were."""
    runner = create_runner()
    runner.attempt(Mock(return_value=1))

    assert not runner.strategy.settings.runs_at_start_of_loop
    runner.strategy.max_attempts(2)
    assert runner.strategy.settings.max_attempts == 2


##################################
#     Tests for exceptions       #
##################################


def test_runner_reraises_last_exception() -> None:
    """Test that the exception of the last attempt is raised as-is."""
    error = TransientError("last")
    operation = Mock(side_effect=[TransientError("first"), error])
    runner = create_runner(max_attempts=2)

    with pytest.raises(TransientError) as exc_info:
        runner.attempt(operation)
    assert exc_info.value is error


def test_runner_exception_with_default() -> None:
    """Test that the default is returned once the retries are
    exhausted."""
    runner = create_runner(max_attempts=2)
    assert runner.attempt(Mock(side_effect=TransientError), default="fallback") == "fallback"


def test_runner_exception_with_none_default() -> None:
    """Test that None is a valid default."""
    runner = create_runner(max_attempts=2)
    assert runner.attempt(Mock(side_effect=TransientError), default=None) is None


def test_runner_callable_default() -> None:
    """Test that a callable default is called."""
    default = Mock(return_value="computed")
    runner = create_runner(max_attempts=2)

    assert runner.attempt(Mock(side_effect=TransientError), default=default) == "computed"
    default.assert_called_once_with()


def test_runner_callable_default_not_called_on_success() -> None:
    """Test that a callable default is not called when the run
    succeeds."""
    default = Mock()
    create_runner().attempt(Mock(return_value=1), default=default)
    default.assert_not_called()


def test_runner_exception_not_matching() -> None:
    """Test that an exception that is not retried stops the run."""
    operation = Mock(side_effect=FatalError("fatal"))
    runner = create_runner().retry_exceptions(TransientError)

    with pytest.raises(FatalError, match=r"fatal"):
        runner.attempt(operation)
    operation.assert_called_once()


def test_runner_exception_not_matching_with_default() -> None:
    """Test that the attempt default applies to exceptions that are not
    retried."""
    runner = create_runner().retry_exceptions(TransientError)
    assert runner.attempt(Mock(side_effect=FatalError), default="fallback") == "fallback"


def test_runner_exception_matching() -> None:
    """Test that only the chosen exceptions are retried."""
    operation = Mock(side_effect=[TransientError(), TransientError(), FatalError()])
    runner = create_runner().retry_exceptions([TransientError, KeyError])

    with pytest.raises(FatalError):
        runner.attempt(operation)
    assert operation.call_count == 3


def test_runner_exception_matcher_default_wins() -> None:
    """Test that the matcher default wins over the attempt default."""
    runner = create_runner(max_attempts=2).retry_exceptions(TransientError, default="matcher")
    assert runner.attempt(Mock(side_effect=TransientError), default="attempt") == "matcher"


def test_runner_exception_matcher_callable_default() -> None:
    """Test that a callable matcher default is called."""
    runner = create_runner(max_attempts=2).retry_all_exceptions(default=lambda: "computed")
    assert runner.attempt(Mock(side_effect=TransientError)) == "computed"


def test_runner_exception_matcher_receives_the_log() -> None:
    """Test that callable matchers receive the log of the attempt."""
    matcher = Mock(side_effect=lambda exc, log: log.attempt_number < 3)  # noqa: ARG005
    operation = Mock(side_effect=TransientError)
    runner = create_runner().retry_exceptions(matcher)

    with pytest.raises(TransientError):
        runner.attempt(operation)
    assert operation.call_count == 3


def test_runner_dont_retry_exceptions() -> None:
    """Test that no exception is retried."""
    operation = Mock(side_effect=TransientError)
    runner = create_runner().dont_retry_exceptions()

    with pytest.raises(TransientError):
        runner.attempt(operation)
    operation.assert_called_once()


def test_runner_dont_retry_exceptions_with_default() -> None:
    """Test the default given when disabling exception retries."""
    runner = create_runner().retry_exceptions(False, default="fallback")
    assert runner.attempt(Mock(side_effect=TransientError), default="attempt") == "fallback"


def test_runner_does_not_catch_base_exceptions(mock_callback: Mock) -> None:
    """Test that exceptions outside Exception are not retried."""
    operation = Mock(side_effect=KeyboardInterrupt)
    runner = create_runner().exception_callback(mock_callback)

    with pytest.raises(KeyboardInterrupt):
        runner.attempt(operation)
    operation.assert_called_once()
    mock_callback.assert_not_called()


###############################
#     Tests for results       #
###############################


def test_runner_retry_when() -> None:
    """Test that invalid results are retried."""
    operation = return_values(None, None, "done")
    runner = create_runner().retry_when(None)

    assert runner.attempt(operation) == "done"
    assert operation.call_count == 3


def test_runner_retry_when_exhausted_returns_last_result() -> None:
    """Test that the last invalid result is returned without default."""
    runner = create_runner(max_attempts=2).retry_when(False)
    assert runner.attempt(return_values(False, False)) is False


def test_runner_retry_when_default() -> None:
    """Test that the predicate default wins over the attempt default."""
    runner = create_runner(max_attempts=2).retry_when(False, default="predicate")
    assert runner.attempt(return_values(False, False), default="attempt") == "predicate"


def test_runner_retry_when_attempt_default() -> None:
    """Test the attempt default once the invalid results are
    exhausted."""
    runner = create_runner(max_attempts=2).retry_when(False)
    assert runner.attempt(return_values(False, False), default="attempt") == "attempt"


def test_runner_retry_when_strict() -> None:
    """Test the strict comparison of results."""
    runner = create_runner().retry_when(0, strict=True)
    assert runner.attempt(return_values(0, False)) is False


def test_runner_retry_until() -> None:
    """Test that results are retried until one matches."""
    operation = return_values("pending", "pending", "done")
    runner = create_runner().retry_until("done")

    assert runner.attempt(operation) == "done"
    assert operation.call_count == 3


def test_runner_retry_when_class() -> None:
    """Test that a class is compared with the result instead of being
    called."""
    operation = return_values(dict, dict, "done")
    runner = create_runner().retry_when(dict)

    assert runner.attempt(operation) == "done"
    assert operation.call_count == 3


def test_runner_retry_when_class_accepts_instances() -> None:
    """Test that an instance does not match a class."""
    runner = create_runner().retry_when(dict)
    assert runner.attempt(return_values({})) == {}


def test_runner_retry_until_class() -> None:
    """Test that results are retried until they are the class."""
    operation = return_values("pending", TransientError)
    runner = create_runner().retry_until(TransientError)

    assert runner.attempt(operation) is TransientError
    assert operation.call_count == 2


def test_runner_exception_matcher_non_exception_class() -> None:
    """Test that a class which is not an exception matches no
    exception."""
    operation = Mock(side_effect=TransientError("boom"))
    runner = create_runner().retry_exceptions(dict)

    with pytest.raises(TransientError, match=r"boom"):
        runner.attempt(operation)
    operation.assert_called_once()


def test_runner_class_default() -> None:
    """Test that a class given as default is returned as is."""
    runner = create_runner(max_attempts=2).retry_when(None, default=list)
    assert runner.attempt(return_values(None, None)) is list


def test_runner_retry_until_predicate_receives_the_log() -> None:
    """Test that callable predicates receive the result and the log."""
    runner = create_runner().retry_until(lambda result, log: log.attempt_number == 4)  # noqa: ARG005
    assert runner.attempt(Mock(return_value="x")) == "x"
    assert len(runner.strategy.logs()) == 4


def test_runner_retry_when_and_until_are_exclusive() -> None:
    """Test that the last call between retry_when and retry_until
    wins."""
    runner = create_runner().retry_until("done").retry_when(None)
    assert runner.attempt(return_values(None, "pending")) == "pending"


def test_runner_mixed_exceptions_and_results() -> None:
    """Test that exceptions and invalid results both count as failed
    attempts."""
    operation = Mock(side_effect=[TransientError(), None, "done"])
    runner = create_runner().retry_when(None)

    assert runner.attempt(operation) == "done"


def test_runner_exception_after_invalid_result() -> None:
    """Test that the outcome of the last attempt decides what is
    returned."""
    error = TransientError()
    runner = create_runner(max_attempts=2).retry_when(None, default="predicate")

    with pytest.raises(TransientError):
        runner.attempt(Mock(side_effect=[None, error]))


###############################
#     Tests for callbacks     #
###############################


@pytest.mark.parametrize("max_attempts", [0, 1, 5])
@pytest.mark.parametrize("succeed_at", [1, 2, 4, 5, 6])
def test_runner_callbacks_called_once(max_attempts: int, succeed_at: int) -> None:
    """Test how many times each callback is called."""
    exception_callback = Mock()
    success_callback = Mock()
    failure_callback = Mock()
    finally_callback = Mock()
    runner = (
        create_runner(max_attempts=max_attempts)
        .exception_callback(exception_callback)
        .success_callback(success_callback)
        .failure_callback(failure_callback)
        .finally_callback(finally_callback)
    )

    result = runner.attempt(succeed_on(succeed_at), default="fallback")

    succeeded = succeed_at <= max_attempts
    assert result == ("ok" if succeeded else "fallback")
    assert exception_callback.call_count == min(succeed_at - 1, max_attempts)
    assert success_callback.call_count == (1 if succeeded else 0)
    assert failure_callback.call_count == (0 if succeeded else 1)
    finally_callback.assert_called_once()
    assert finally_callback.call_args[0][0].succeeded is succeeded


def test_runner_exception_callback_info() -> None:
    """Test the information passed to the exception callbacks."""
    infos = []
    runner = create_runner(max_attempts=2).exception_callback(infos.append)

    with pytest.raises(TransientError):
        runner.attempt(Mock(side_effect=TransientError))

    assert [info.will_retry for info in infos] == [True, False]
    assert [info.log.attempt_number for info in infos] == [1, 2]
    assert all(isinstance(info.exception, TransientError) for info in infos)
    assert len(infos[1].logs) == 2


def test_runner_exception_callback_not_retried() -> None:
    """Test that will_retry is False for exceptions that are not
    retried."""
    infos = []
    runner = create_runner().dont_retry_exceptions().exception_callback(infos.append)

    with pytest.raises(TransientError):
        runner.attempt(Mock(side_effect=TransientError))
    assert [info.will_retry for info in infos] == [False]


def test_runner_invalid_result_callback_info() -> None:
    """Test the information passed to the invalid result callbacks."""
    infos = []
    runner = create_runner(max_attempts=2).retry_when(None).invalid_result_callback(infos.append)

    runner.attempt(return_values(None, None))

    assert [info.will_retry for info in infos] == [True, False]
    assert [info.result for info in infos] == [None, None]


def test_runner_success_callback_info(mock_callback: Mock) -> None:
    """Test the information passed to the success callbacks."""
    runner = create_runner().success_callback(mock_callback)
    runner.attempt(succeed_on(2, result=42))

    info = mock_callback.call_args[0][0]
    assert info.result == 42
    assert info.log.attempt_number == 2
    assert len(info.logs) == 2


def test_runner_failure_callback_info(mock_callback: Mock) -> None:
    """Test the information passed to the failure callbacks."""
    runner = create_runner(max_attempts=3).fallback_callback(mock_callback)
    runner.attempt(Mock(side_effect=TransientError), default=None)

    info = mock_callback.call_args[0][0]
    assert info.log.attempt_number == 3
    assert len(info.logs) == 3


def test_runner_callbacks_without_attempts(mock_callback: Mock) -> None:
    """Test the callbacks when no attempt is allowed."""
    operation = Mock()
    runner = create_runner(max_attempts=0).failure_callback(mock_callback)

    assert runner.attempt(operation) is None
    operation.assert_not_called()
    info = mock_callback.call_args[0][0]
    assert info.log is None
    assert info.logs == []


def test_runner_callback_lists() -> None:
    """Test that several callbacks can be registered at once."""
    first, second = Mock(), Mock()
    create_runner().success_callback([first, second]).attempt(Mock(return_value=1))

    first.assert_called_once()
    second.assert_called_once()


def test_runner_finally_callback_called_when_success_callback_raises(
    mock_callback: Mock,
) -> None:
    """Test that the finally callbacks are called even if a success
    callback raises."""
    runner = (
        create_runner()
        .success_callback(Mock(side_effect=RuntimeError("callback failed")))
        .finally_callback(mock_callback)
    )

    with pytest.raises(RuntimeError, match=r"callback failed"):
        runner.attempt(Mock(return_value=1))
    mock_callback.assert_called_once()
    assert mock_callback.call_args.args[0].succeeded


def test_runner_finally_callback_exception_wins() -> None:
    """Test that an exception raised by a finally callback replaces the
    exception of the operation."""
    runner = create_runner(max_attempts=1).finally_callback(
        Mock(side_effect=RuntimeError("finally failed"))
    )

    with pytest.raises(RuntimeError, match=r"finally failed"):
        runner.attempt(Mock(side_effect=TransientError))


def test_runner_exception_callback_can_stop_the_run() -> None:
    """Test that an exception raised by an exception callback ends the
    run."""

    def stop(info: Any) -> None:
        raise FatalError(str(info.exception))

    operation = Mock(side_effect=TransientError("boom"))
    runner = create_runner().exception_callback(stop)

    with pytest.raises(FatalError, match=r"boom"):
        runner.attempt(operation)
    operation.assert_called_once()


@pytest.mark.parametrize(
    "configure",
    [
        lambda runner: runner.retry_when(None),
        lambda runner: runner.retry_until("done"),
    ],
)
def test_runner_callback_order(configure: Callable[[BackoffRunner], BackoffRunner]) -> None:
    """Test the order in which the callbacks are called."""
    calls = []
    runner = configure(create_runner(max_attempts=3))
    runner.invalid_result_callback(lambda info: calls.append("invalid"))  # noqa: ARG005
    runner.exception_callback(lambda info: calls.append("exception"))  # noqa: ARG005
    runner.success_callback(lambda info: calls.append("success"))  # noqa: ARG005
    runner.finally_callback(lambda info: calls.append("finally"))  # noqa: ARG005

    runner.attempt(Mock(side_effect=[TransientError(), None, "done"]))

    assert calls == ["exception", "invalid", "success", "finally"]
