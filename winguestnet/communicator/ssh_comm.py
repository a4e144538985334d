# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/communicator/ssh_comm.py
from __future__ import annotations

import base64
import logging
import subprocess
import time
from typing import Any, Dict, List, Tuple

from ..core.exceptions import CommunicatorError
from ..core.utils import U
from .base import Communicator
from .ssh_config import SSHConfig

_TRANSIENT_MARKERS = (
    "connection timed out",
    "connection refused",
    "no route to host",
    "network is unreachable",
    "could not resolve hostname",
    "temporary failure in name resolution",
    "kex_exchange_identification",
    "connection reset by peer",
    "broken pipe",
    "connection closed",
)


def encode_powershell(script: str) -> str:
    """-EncodedCommand wants base64 over UTF-16LE."""
    return base64.b64encode(script.encode("utf-16-le")).decode("ascii")


class SSHCommunicator(Communicator):
    """
    PowerShell over the system ssh client (Windows OpenSSH server).

    The script travels as -EncodedCommand, so no quoting survives the remote
    cmd.exe/PowerShell layers.
    """

    def __init__(self, logger: logging.Logger, cfg: SSHConfig):
        super().__init__(logger)
        self.cfg = cfg

    def _argv(self, command: str) -> List[str]:
        return self.cfg.base_cmd() + [
            "powershell.exe",
            "-NoProfile",
            "-NonInteractive",
            "-ExecutionPolicy",
            "Bypass",
            "-EncodedCommand",
            encode_powershell(command),
        ]

    @staticmethod
    def _looks_transient(rc: int, stderr: str) -> bool:
        """
        Retry only transport failures (ssh exit 255, connection errors),
        never a remote command that ran and failed. Timeouts are handled apart.
        """
        if rc == 255:
            return True
        s = (stderr or "").lower()
        return any(m in s for m in _TRANSIENT_MARKERS)

    def _run(self, command: str, options: Dict[str, Any]) -> Tuple[int, str, str]:
        argv = self._argv(command)
        timeout = options.get("timeout")
        attempts = 1 + self.cfg.retries

        for attempt in range(1, attempts + 1):
            try:
                cp = U.run_cmd(self.logger, argv, check=False, capture=True, timeout=timeout)
            except subprocess.TimeoutExpired as e:
                if attempt < attempts:
                    self.logger.warning(
                        "SSH timeout (attempt %d/%d); retrying in %.1fs", attempt, attempts, self.cfg.retry_sleep
                    )
                    time.sleep(self.cfg.retry_sleep)
                    continue
                raise CommunicatorError(msg=f"SSH command timed out on {self.cfg.host}", cause=e).with_context(
                    target=self.cfg.describe(), timeout=timeout
                )

            rc = int(cp.returncode or 0)
            stdout, stderr = cp.stdout or "", cp.stderr or ""
            if rc != 0 and self._looks_transient(rc, stderr):
                if attempt < attempts:
                    self.logger.warning(
                        "SSH transport issue (attempt %d/%d, rc=%d); retrying in %.1fs",
                        attempt,
                        attempts,
                        rc,
                        self.cfg.retry_sleep,
                    )
                    time.sleep(self.cfg.retry_sleep)
                    continue
                raise CommunicatorError(msg=f"SSH transport failure talking to {self.cfg.host}").with_context(
                    target=self.cfg.describe(), rc=rc, stderr=stderr.strip()[:400]
                )
            return rc, stdout, stderr

        raise CommunicatorError(msg="ssh failed with no result")
