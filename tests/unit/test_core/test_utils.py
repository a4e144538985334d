# SPDX-License-Identifier: LGPL-3.0-or-later
import subprocess
import unittest
from unittest.mock import Mock, patch

from winguestnet.core.utils import U


class TestUtilsText(unittest.TestCase):
    def test_to_text(self):
        self.assertEqual(U.to_text(None), "")
        self.assertEqual(U.to_text(b"caf\xc3\xa9"), "café")
        self.assertEqual(U.to_text(3), "3")

    def test_json_dump_sorted(self):
        self.assertEqual(U.json_dump({"b": 1, "a": 2}), '{\n  "a": 2,\n  "b": 1\n}')


class TestRunCmd(unittest.TestCase):
    @patch("winguestnet.core.utils.subprocess.run")
    def test_passes_options(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(["virsh"], 0, stdout="out", stderr="")

        cp = U.run_cmd(Mock(), ["virsh", "list"], check=False, capture=True, timeout=5)

        self.assertEqual(cp.stdout, "out")
        kwargs = mock_run.call_args.kwargs
        self.assertFalse(kwargs["check"])
        self.assertTrue(kwargs["capture_output"])
        self.assertEqual(kwargs["timeout"], 5)
        self.assertTrue(kwargs["text"])

    @patch("winguestnet.core.utils.subprocess.run")
    def test_called_process_error_reraised(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(1, ["virsh"], stderr="error: no domain")
        logger = Mock()

        with self.assertRaises(subprocess.CalledProcessError):
            U.run_cmd(logger, ["virsh", "domiflist", "nope"])
        logger.error.assert_called_once()

    @patch("winguestnet.core.utils.subprocess.run")
    def test_timeout_reraised_without_extra_options(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(["ssh"], 3)
        logger = Mock()

        with self.assertRaises(subprocess.TimeoutExpired):
            U.run_cmd(logger, ["ssh", "host"], timeout=3)
        logger.error.assert_called_once()
        kwargs = mock_run.call_args.kwargs
        for unused in ("env", "cwd", "input"):
            self.assertNotIn(unused, kwargs)
