r"""Fluent entry point of abackoff.

``Backoff`` is a ``BackoffStrategy`` with named constructors for each
algorithm, and the runner configuration (exception matchers, result
predicates, callbacks) available on the same object:

```python
from abackoff import Backoff

result = (
    Backoff.exponential(1)
    .max_attempts(5)
    .max_delay(30)
    .retry_exceptions(ConnectionError)
    .attempt(fetch_report, default=None)
)
```

The factories apply the default maximum number of attempts (see
``set_default_max_attempts``), and full jitter for the deterministic
algorithms.
"""

from __future__ import annotations

__all__ = ["Backoff"]

from typing import TYPE_CHECKING, Any, ClassVar, Literal

from abackoff.algorithms import (
    CallbackBackoffAlgorithm,
    DecorrelatedBackoffAlgorithm,
    ExponentialBackoffAlgorithm,
    FibonacciBackoffAlgorithm,
    FixedBackoffAlgorithm,
    LinearBackoffAlgorithm,
    NoBackoffAlgorithm,
    NoopBackoffAlgorithm,
    PolynomialBackoffAlgorithm,
    RandomBackoffAlgorithm,
    SequenceBackoffAlgorithm,
)
from abackoff.core.config import (
    DEFAULT_DECORRELATED_MULTIPLIER,
    DEFAULT_EXPONENTIAL_FACTOR,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_POLYNOMIAL_POWER,
    DEFAULT_UNIT,
)
from abackoff.retry.config import MISSING
from abackoff.retry.runner import BackoffRunner
from abackoff.retry.strategy import BackoffStrategy

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from typing import Self

    from abackoff.algorithms.base import BaseBackoffAlgorithm
    from abackoff.jitter.base import BaseJitter


class Backoff(BackoffStrategy):
    """Backoff strategy with fluent factories and a built-in runner.

    Args:
        algorithm: The algorithm calculating the base delays.
        jitter: Optional jitter applied to the delays.
        max_attempts: The maximum number of attempts, or None for no
            limit.
        max_delay: Optional upper bound applied to every delay.
        unit: The unit the delays are expressed in.
        runs_at_start_of_loop: Whether ``step()`` is called before each
            attempt instead of after.
        immediate_first_retry: Whether a ``0`` delay is inserted before
            the first calculated delay.
        delays_enabled: When False, every delay is ``0``.
        retries_enabled: When False, only the first attempt is made.

    Example:
        ```pycon
        >>> from abackoff import Backoff
        >>> Backoff.linear(1).no_jitter().max_attempts(8).generate_test_sequence(20).get_delays()
        [1, 2, 3, 4, 5, 6, 7]
        >>> Backoff.sequence([9, 8, 7, 6, 5], default=4).generate_test_sequence(10).get_delays()
        [9, 8, 7, 6, 5, 4, 4, 4, 4, 4]

        ```
    """

    _default_max_attempts: ClassVar[int | None] = DEFAULT_MAX_ATTEMPTS

    def __init__(
        self,
        algorithm: BaseBackoffAlgorithm,
        jitter: BaseJitter | None = None,
        max_attempts: int | None = None,
        max_delay: float | None = None,
        unit: str | None = DEFAULT_UNIT,
        runs_at_start_of_loop: bool = False,
        immediate_first_retry: bool = False,
        delays_enabled: bool = True,
        retries_enabled: bool = True,
    ) -> None:
        super().__init__(
            algorithm,
            jitter=jitter,
            max_attempts=max_attempts,
            max_delay=max_delay,
            unit=unit,
            runs_at_start_of_loop=runs_at_start_of_loop,
            immediate_first_retry=immediate_first_retry,
            delays_enabled=delays_enabled,
            retries_enabled=retries_enabled,
        )
        self.runner = BackoffRunner(self)

    @classmethod
    def set_default_max_attempts(cls, max_attempts: int | None) -> None:
        """Set the maximum number of attempts applied by the factories.

        Args:
            max_attempts: The maximum number of attempts, or None for no
                limit.
        """
        cls._default_max_attempts = max_attempts

    @classmethod
    def get_default_max_attempts(cls) -> int | None:
        return cls._default_max_attempts

    ##########################
    #       Factories        #
    ##########################

    @classmethod
    def fixed(cls, delay: float) -> Self:
        return cls(FixedBackoffAlgorithm(delay)).max_attempts(cls._default_max_attempts).full_jitter()

    @classmethod
    def fixed_ms(cls, delay: float) -> Self:
        return cls.fixed(delay).unit_ms()

    @classmethod
    def fixed_us(cls, delay: float) -> Self:
        return cls.fixed(delay).unit_us()

    @classmethod
    def linear(cls, initial_delay: float, delay_increase: float | None = None) -> Self:
        algorithm = LinearBackoffAlgorithm(initial_delay, delay_increase)
        return cls(algorithm).max_attempts(cls._default_max_attempts).full_jitter()

    @classmethod
    def linear_ms(cls, initial_delay: float, delay_increase: float | None = None) -> Self:
        return cls.linear(initial_delay, delay_increase).unit_ms()

    @classmethod
    def linear_us(cls, initial_delay: float, delay_increase: float | None = None) -> Self:
        return cls.linear(initial_delay, delay_increase).unit_us()

    @classmethod
    def exponential(cls, initial_delay: float, factor: float = DEFAULT_EXPONENTIAL_FACTOR) -> Self:
        algorithm = ExponentialBackoffAlgorithm(initial_delay, factor)
        return cls(algorithm).max_attempts(cls._default_max_attempts).full_jitter()

    @classmethod
    def exponential_ms(
        cls, initial_delay: float, factor: float = DEFAULT_EXPONENTIAL_FACTOR
    ) -> Self:
        return cls.exponential(initial_delay, factor).unit_ms()

    @classmethod
    def exponential_us(
        cls, initial_delay: float, factor: float = DEFAULT_EXPONENTIAL_FACTOR
    ) -> Self:
        return cls.exponential(initial_delay, factor).unit_us()

    @classmethod
    def polynomial(cls, initial_delay: float, power: float = DEFAULT_POLYNOMIAL_POWER) -> Self:
        algorithm = PolynomialBackoffAlgorithm(initial_delay, power)
        return cls(algorithm).max_attempts(cls._default_max_attempts).full_jitter()

    @classmethod
    def polynomial_ms(cls, initial_delay: float, power: float = DEFAULT_POLYNOMIAL_POWER) -> Self:
        return cls.polynomial(initial_delay, power).unit_ms()

    @classmethod
    def polynomial_us(cls, initial_delay: float, power: float = DEFAULT_POLYNOMIAL_POWER) -> Self:
        return cls.polynomial(initial_delay, power).unit_us()

    @classmethod
    def fibonacci(cls, initial_delay: float, include_first: bool = False) -> Self:
        algorithm = FibonacciBackoffAlgorithm(initial_delay, include_first)
        return cls(algorithm).max_attempts(cls._default_max_attempts).full_jitter()

    @classmethod
    def fibonacci_ms(cls, initial_delay: float, include_first: bool = False) -> Self:
        return cls.fibonacci(initial_delay, include_first).unit_ms()

    @classmethod
    def fibonacci_us(cls, initial_delay: float, include_first: bool = False) -> Self:
        return cls.fibonacci(initial_delay, include_first).unit_us()

    @classmethod
    def decorrelated(
        cls, base_delay: float, multiplier: float = DEFAULT_DECORRELATED_MULTIPLIER
    ) -> Self:
        algorithm = DecorrelatedBackoffAlgorithm(base_delay, multiplier)
        return cls(algorithm).max_attempts(cls._default_max_attempts)

    @classmethod
    def decorrelated_ms(
        cls, base_delay: float, multiplier: float = DEFAULT_DECORRELATED_MULTIPLIER
    ) -> Self:
        return cls.decorrelated(base_delay, multiplier).unit_ms()

    @classmethod
    def decorrelated_us(
        cls, base_delay: float, multiplier: float = DEFAULT_DECORRELATED_MULTIPLIER
    ) -> Self:
        return cls.decorrelated(base_delay, multiplier).unit_us()

    @classmethod
    def random(cls, min_delay: float, max_delay: float) -> Self:
        algorithm = RandomBackoffAlgorithm(min_delay, max_delay)
        return cls(algorithm).max_attempts(cls._default_max_attempts)

    @classmethod
    def random_ms(cls, min_delay: float, max_delay: float) -> Self:
        return cls.random(min_delay, max_delay).unit_ms()

    @classmethod
    def random_us(cls, min_delay: float, max_delay: float) -> Self:
        return cls.random(min_delay, max_delay).unit_us()

    @classmethod
    def sequence(cls, delays: Iterable[float | None], default: float | None = None) -> Self:
        """Use a predefined list of delays, then ``default`` (or stop)
        once it is exhausted.

        The delays are used as given: no jitter is applied and no
        maximum number of attempts is set.
        """
        return cls(SequenceBackoffAlgorithm(delays, default))

    @classmethod
    def sequence_ms(cls, delays: Iterable[float | None], default: float | None = None) -> Self:
        return cls.sequence(delays, default).unit_ms()

    @classmethod
    def sequence_us(cls, delays: Iterable[float | None], default: float | None = None) -> Self:
        return cls.sequence(delays, default).unit_us()

    @classmethod
    def callback(cls, callback: Callable[[int, float | None], float | None]) -> Self:
        algorithm = CallbackBackoffAlgorithm(callback)
        return cls(algorithm).max_attempts(cls._default_max_attempts).full_jitter()

    @classmethod
    def callback_ms(cls, callback: Callable[[int, float | None], float | None]) -> Self:
        return cls.callback(callback).unit_ms()

    @classmethod
    def callback_us(cls, callback: Callable[[int, float | None], float | None]) -> Self:
        return cls.callback(callback).unit_us()

    @classmethod
    def custom(cls, algorithm: BaseBackoffAlgorithm) -> Self:
        return cls(algorithm).max_attempts(cls._default_max_attempts).full_jitter()

    @classmethod
    def custom_ms(cls, algorithm: BaseBackoffAlgorithm) -> Self:
        return cls.custom(algorithm).unit_ms()

    @classmethod
    def custom_us(cls, algorithm: BaseBackoffAlgorithm) -> Self:
        return cls.custom(algorithm).unit_us()

    @classmethod
    def noop(cls) -> Self:
        """Retry straight away, without waiting."""
        return cls(NoopBackoffAlgorithm()).max_attempts(cls._default_max_attempts)

    @classmethod
    def none(cls) -> Self:
        """Make a single attempt."""
        return cls(NoBackoffAlgorithm())

    ##########################
    #         Runner         #
    ##########################

    def retry_exceptions(
        self, exceptions: Any | Literal[False] = (), default: Any = MISSING
    ) -> Self:
        self.runner.retry_exceptions(exceptions, default)
        return self

    def retry_all_exceptions(self, default: Any = MISSING) -> Self:
        self.runner.retry_all_exceptions(default)
        return self

    def dont_retry_exceptions(self, default: Any = MISSING) -> Self:
        self.runner.dont_retry_exceptions(default)
        return self

    def retry_when(self, match: Any, strict: bool = False, default: Any = MISSING) -> Self:
        self.runner.retry_when(match, strict, default)
        return self

    def retry_until(self, match: Any, strict: bool = False) -> Self:
        self.runner.retry_until(match, strict)
        return self

    def exception_callback(self, *callbacks: Callable | list[Callable]) -> Self:
        self.runner.exception_callback(*callbacks)
        return self

    def invalid_result_callback(self, *callbacks: Callable | list[Callable]) -> Self:
        self.runner.invalid_result_callback(*callbacks)
        return self

    def success_callback(self, *callbacks: Callable | list[Callable]) -> Self:
        self.runner.success_callback(*callbacks)
        return self

    def failure_callback(self, *callbacks: Callable | list[Callable]) -> Self:
        self.runner.failure_callback(*callbacks)
        return self

    def fallback_callback(self, *callbacks: Callable | list[Callable]) -> Self:
        self.runner.fallback_callback(*callbacks)
        return self

    def finally_callback(self, *callbacks: Callable | list[Callable]) -> Self:
        self.runner.finally_callback(*callbacks)
        return self

    def attempt(self, operation: Callable[[], Any], default: Any = MISSING) -> Any:
        """Call ``operation`` until it succeeds or the retries are
        exhausted (see ``BackoffRunner.attempt``)."""
        return self.runner.attempt(operation, default)
