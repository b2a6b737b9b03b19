r"""Backoff algorithms for calculating retry delays.

This package provides the algorithms a ``BackoffStrategy`` uses to
calculate the delay before each retry: fixed, linear, exponential,
polynomial, Fibonacci, decorrelated, random, sequence and callback
based delays, plus two algorithms that never wait.
"""

from __future__ import annotations

__all__ = [
    "BaseBackoffAlgorithm",
    "CallbackBackoffAlgorithm",
    "DecorrelatedBackoffAlgorithm",
    "ExponentialBackoffAlgorithm",
    "FibonacciBackoffAlgorithm",
    "FixedBackoffAlgorithm",
    "LinearBackoffAlgorithm",
    "NoBackoffAlgorithm",
    "NoopBackoffAlgorithm",
    "PolynomialBackoffAlgorithm",
    "RandomBackoffAlgorithm",
    "SequenceBackoffAlgorithm",
]

from abackoff.algorithms.base import BaseBackoffAlgorithm
from abackoff.algorithms.callback import CallbackBackoffAlgorithm
from abackoff.algorithms.decorrelated import DecorrelatedBackoffAlgorithm
from abackoff.algorithms.exponential import ExponentialBackoffAlgorithm
from abackoff.algorithms.fibonacci import FibonacciBackoffAlgorithm
from abackoff.algorithms.fixed import FixedBackoffAlgorithm
from abackoff.algorithms.linear import LinearBackoffAlgorithm
from abackoff.algorithms.noop import NoBackoffAlgorithm, NoopBackoffAlgorithm
from abackoff.algorithms.polynomial import PolynomialBackoffAlgorithm
from abackoff.algorithms.random import RandomBackoffAlgorithm
from abackoff.algorithms.sequence import SequenceBackoffAlgorithm
