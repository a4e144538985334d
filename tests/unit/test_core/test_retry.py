# SPDX-License-Identifier: LGPL-3.0-or-later
import unittest
from unittest.mock import Mock

from winguestnet.core.retry import retry_operation


class TestRetryOperation(unittest.TestCase):
    def test_returns_first_success(self):
        op = Mock(return_value="ok")
        sleep = Mock()

        self.assertEqual(retry_operation(op, sleep=sleep), "ok")
        op.assert_called_once()
        sleep.assert_not_called()

    def test_retries_matching_exceptions(self):
        op = Mock(side_effect=[ConnectionError("down"), ConnectionError("down"), "ok"])
        sleep = Mock()

        result = retry_operation(op, max_attempts=3, jitter_s=0, exceptions=(ConnectionError,), sleep=sleep)

        self.assertEqual(result, "ok")
        self.assertEqual(op.call_count, 3)
        self.assertEqual([c.args[0] for c in sleep.call_args_list], [1.0, 2.0])

    def test_backoff_is_capped(self):
        op = Mock(side_effect=[OSError(), OSError(), OSError(), "ok"])
        sleep = Mock()

        retry_operation(op, max_attempts=4, base_backoff_s=5, max_backoff_s=8, jitter_s=0, sleep=sleep)

        self.assertEqual([c.args[0] for c in sleep.call_args_list], [5, 8, 8])

    def test_reraises_last_exception(self):
        op = Mock(side_effect=ConnectionError("still down"))

        with self.assertRaises(ConnectionError):
            retry_operation(op, max_attempts=2, jitter_s=0, exceptions=(ConnectionError,), sleep=Mock())
        self.assertEqual(op.call_count, 2)

    def test_other_exceptions_propagate_immediately(self):
        op = Mock(side_effect=ValueError("bad"))

        with self.assertRaises(ValueError):
            retry_operation(op, max_attempts=5, exceptions=(ConnectionError,), sleep=Mock())
        op.assert_called_once()

    def test_logs_attempts(self):
        logger = Mock()
        op = Mock(side_effect=[TimeoutError("t"), "ok"])

        retry_operation(op, max_attempts=2, jitter_s=0, logger=logger, operation_name="winrm run_ps", sleep=Mock())

        logger.log.assert_called_once()
        self.assertIn("winrm run_ps", logger.log.call_args.args[2])
