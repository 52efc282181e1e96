"""Unit tests for tasks_api.core.retry: delay schedule and retry_call behavior."""

import unittest
from unittest.mock import MagicMock

from tasks_api.core.retry import RetryPolicy, retry_call


class TestRetryPolicyDelays(unittest.TestCase):
    """delay_for gives fixed, exponential, or capped delays."""

    def test_fixed_delay(self) -> None:
        policy = RetryPolicy(max_attempts=5, delay=3.0)
        self.assertEqual([policy.delay_for(i) for i in (1, 2, 3)], [3.0, 3.0, 3.0])

    def test_exponential_delay(self) -> None:
        policy = RetryPolicy(max_attempts=5, delay=1.0, multiplier=2.0)
        self.assertEqual([policy.delay_for(i) for i in (1, 2, 3, 4)], [1.0, 2.0, 4.0, 8.0])

    def test_max_delay_caps_growth(self) -> None:
        policy = RetryPolicy(max_attempts=5, delay=1.0, multiplier=10.0, max_delay=5.0)
        self.assertEqual(policy.delay_for(3), 5.0)

    def test_invalid_policy(self) -> None:
        with self.assertRaises(ValueError):
            RetryPolicy(max_attempts=0, delay=1.0)
        with self.assertRaises(ValueError):
            RetryPolicy(max_attempts=1, delay=-1.0)
        with self.assertRaises(ValueError):
            RetryPolicy(max_attempts=1, delay=1.0, multiplier=0.5)


class TestRetryCall(unittest.TestCase):
    """retry_call retries listed exceptions and re-raises the last one."""

    def test_first_attempt_succeeds_without_sleep(self) -> None:
        sleep = MagicMock()
        result = retry_call(
            lambda: "ok", RetryPolicy(3, 1.0), retry_on=(ValueError,), sleep=sleep
        )
        self.assertEqual(result, "ok")
        sleep.assert_not_called()

    def test_retries_until_success(self) -> None:
        func = MagicMock(side_effect=[ValueError("a"), ValueError("b"), "done"])
        sleep = MagicMock()
        result = retry_call(func, RetryPolicy(5, 3.0), retry_on=(ValueError,), sleep=sleep)
        self.assertEqual(result, "done")
        self.assertEqual(func.call_count, 3)
        self.assertEqual([c.args[0] for c in sleep.call_args_list], [3.0, 3.0])

    def test_exhausted_reraises_last_error(self) -> None:
        errors = [ValueError("first"), ValueError("second"), ValueError("last")]
        func = MagicMock(side_effect=errors)
        sleep = MagicMock()
        with self.assertRaises(ValueError) as ctx:
            retry_call(func, RetryPolicy(3, 1.0), retry_on=(ValueError,), sleep=sleep)
        self.assertIs(ctx.exception, errors[-1])
        # No sleep after the final attempt.
        self.assertEqual(sleep.call_count, 2)

    def test_other_errors_are_not_retried(self) -> None:
        func = MagicMock(side_effect=KeyError("boom"))
        sleep = MagicMock()
        with self.assertRaises(KeyError):
            retry_call(func, RetryPolicy(5, 1.0), retry_on=(ValueError,), sleep=sleep)
        self.assertEqual(func.call_count, 1)
        sleep.assert_not_called()


if __name__ == "__main__":
    unittest.main()
