# SPDX-License-Identifier: LGPL-3.0-or-later
import unittest
from types import SimpleNamespace
from unittest.mock import Mock, patch

import requests
from winrm.exceptions import WinRMTransportError

from fakes.fake_logger import FakeLogger
from winguestnet.communicator.winrm_comm import WinRMCommunicator, WinRMConfig
from winguestnet.core.exceptions import CommunicatorError, ConfigError


def _resp(status=0, out=b"", err=b""):
    return SimpleNamespace(status_code=status, std_out=out, std_err=err)


class TestWinRMConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = WinRMConfig(host="win10")
        self.assertEqual(cfg.endpoint(), "http://win10:5985/wsman")
        self.assertEqual(cfg.user, "vagrant")
        self.assertEqual(cfg.transport, "ntlm")

    def test_ssl_endpoint(self):
        self.assertEqual(WinRMConfig(host="win10", ssl=True, port=5986).endpoint(), "https://win10:5986/wsman")

    def test_validation(self):
        with self.assertRaises(ConfigError):
            WinRMConfig(host=" ")
        with self.assertRaises(ConfigError):
            WinRMConfig(host="win10", port=0)

    def test_read_timeout_bumped(self):
        cfg = WinRMConfig(host="win10", operation_timeout=120, read_timeout=60)
        self.assertEqual(cfg.read_timeout, 130)


@patch("winguestnet.communicator.winrm_comm.winrm.Session")
class TestWinRMCommunicator(unittest.TestCase):
    def test_session_created_lazily_once(self, session_cls):
        session_cls.return_value.run_ps.return_value = _resp(out=b"3\r\n")
        comm = WinRMCommunicator(FakeLogger(), WinRMConfig(host="win10", password="pw"))
        session_cls.assert_not_called()

        comm.execute("(test-wsman)")
        comm.execute("(test-wsman)")

        session_cls.assert_called_once()
        args, kwargs = session_cls.call_args
        self.assertEqual(args[0], "http://win10:5985/wsman")
        self.assertEqual(kwargs["auth"], ("vagrant", "pw"))
        self.assertEqual(kwargs["server_cert_validation"], "ignore")

    def test_output_decoded(self, session_cls):
        session_cls.return_value.run_ps.return_value = _resp(out=b"a\r\nb\r\n", err=b"")
        comm = WinRMCommunicator(FakeLogger(), WinRMConfig(host="win10"))

        lines = comm.execute("Get-Thing")

        self.assertEqual([ln.text for ln in lines], ["a", "b"])
        session_cls.return_value.run_ps.assert_called_with("Get-Thing")

    def test_nonzero_status_raises(self, session_cls):
        session_cls.return_value.run_ps.return_value = _resp(status=1, err=b"boom")
        comm = WinRMCommunicator(FakeLogger(), WinRMConfig(host="win10"))

        with self.assertRaises(CommunicatorError) as cm:
            comm.execute("Get-Thing")
        self.assertEqual(cm.exception.context["stderr"], "boom")

    @patch("winguestnet.core.retry.time.sleep")
    def test_transient_errors_retried(self, _sleep, session_cls):
        session_cls.return_value.run_ps.side_effect = [requests.exceptions.ConnectionError("reset"), _resp(out=b"ok")]
        comm = WinRMCommunicator(Mock(), WinRMConfig(host="win10", retries=1, retry_sleep=0))

        lines = comm.execute("Get-Thing")

        self.assertEqual(lines[0].text, "ok")
        self.assertEqual(session_cls.return_value.run_ps.call_count, 2)

    def test_transport_error_wrapped(self, session_cls):
        session_cls.return_value.run_ps.side_effect = WinRMTransportError("http", 401, "unauthorized")
        comm = WinRMCommunicator(Mock(), WinRMConfig(host="win10"))

        with self.assertRaises(CommunicatorError) as cm:
            comm.execute("Get-Thing")
        self.assertIsInstance(cm.exception.cause, WinRMTransportError)
        self.assertEqual(cm.exception.context["endpoint"], "http://win10:5985/wsman")
