from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from abackoff import Backoff

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks.

    Returns:
        A Mock object that can be used as a callback function.

    Example:
        >>> def test_callback(mock_callback):
        ...     Backoff.noop().success_callback(mock_callback).attempt(lambda: 1)
        ...     mock_callback.assert_called_once()
    """
    return Mock()


@pytest.fixture(autouse=True)
def _restore_default_max_attempts() -> Generator[None, None, None]:
    """Restore the default maximum number of attempts of the factories
    after each test."""
    default = Backoff.get_default_max_attempts()
    yield
    Backoff.set_default_max_attempts(default)
