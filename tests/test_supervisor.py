from unittest.mock import MagicMock

import pytest
from telegram.error import InvalidToken, NetworkError

from supervisor import BoundedRetry, InfiniteRetry, run_supervised


def test_returns_when_transport_stops_normally() -> None:
    run_once = MagicMock(return_value=None)
    run_supervised(run_once, InfiniteRetry())
    assert run_once.call_count == 1


def test_infinite_retry_restarts_after_every_failure() -> None:
    failures = [NetworkError("timed out"), InvalidToken(), RuntimeError("boom")] * 10
    run_once = MagicMock(side_effect=failures + [None])
    sleep = MagicMock()

    run_supervised(run_once, InfiniteRetry(), sleep=sleep)

    assert run_once.call_count == len(failures) + 1
    sleep.assert_not_called()


def test_infinite_retry_with_delay_sleeps_between_attempts() -> None:
    run_once = MagicMock(side_effect=[NetworkError("down"), None])
    sleep = MagicMock()

    run_supervised(run_once, InfiniteRetry(delay=2.5), sleep=sleep)

    sleep.assert_called_once_with(2.5)


def test_bounded_retry_gives_up_and_reraises() -> None:
    run_once = MagicMock(side_effect=NetworkError("down"))
    sleep = MagicMock()

    with pytest.raises(NetworkError):
        run_supervised(run_once, BoundedRetry(max_attempts=3, base_delay=1.0), sleep=sleep)

    assert run_once.call_count == 3
    assert [call.args[0] for call in sleep.call_args_list] == [1.0, 2.0]


def test_bounded_retry_delay_is_capped() -> None:
    policy = BoundedRetry(max_attempts=100, base_delay=1.0, max_delay=10.0)
    assert policy.next_delay(1) == 1.0
    assert policy.next_delay(4) == 8.0
    assert policy.next_delay(20) == 10.0
    assert policy.next_delay(100) is None
