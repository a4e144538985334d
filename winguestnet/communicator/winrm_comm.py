# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winguestnet/communicator/winrm_comm.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import requests
import winrm
from winrm.exceptions import WinRMOperationTimeoutError, WinRMTransportError

from ..core.exceptions import CommunicatorError, ConfigError
from ..core.retry import retry_operation
from ..core.utils import U
from .base import Communicator

_TRANSIENT_ERRORS = (
    WinRMTransportError,
    WinRMOperationTimeoutError,
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
)


@dataclass(frozen=True)
class WinRMConfig:
    host: str
    user: str = "vagrant"
    password: Optional[str] = None
    port: int = 5985
    ssl: bool = False
    transport: str = "ntlm"  # ntlm | basic | kerberos | credssp
    validate_cert: bool = False
    operation_timeout: int = 60
    read_timeout: int = 70
    retries: int = 0
    retry_sleep: float = 1.0

    def __post_init__(self) -> None:
        host = (self.host or "").strip()
        if not host:
            raise ConfigError(msg="WinRM host must not be empty")
        object.__setattr__(self, "host", host)
        if self.port <= 0 or self.port > 65535:
            raise ConfigError(msg=f"Invalid WinRM port: {self.port}")
        if self.read_timeout <= self.operation_timeout:
            # pywinrm rejects read_timeout <= operation_timeout
            object.__setattr__(self, "read_timeout", self.operation_timeout + 10)

    def endpoint(self) -> str:
        scheme = "https" if self.ssl else "http"
        return f"{scheme}://{self.host}:{self.port}/wsman"

    def describe(self) -> str:
        return f"{self.user}@{self.endpoint()} transport={self.transport}"


class WinRMCommunicator(Communicator):
    """Runs PowerShell through a pywinrm Session (connected lazily)."""

    def __init__(self, logger: logging.Logger, cfg: WinRMConfig):
        super().__init__(logger)
        self.cfg = cfg
        self._winrm: Optional[winrm.Session] = None

    def _client(self) -> winrm.Session:
        if self._winrm is None:
            self.logger.debug("Opening WinRM session %s", self.cfg.describe())
            self._winrm = winrm.Session(
                self.cfg.endpoint(),
                auth=(self.cfg.user, self.cfg.password or ""),
                transport=self.cfg.transport,
                server_cert_validation="validate" if self.cfg.validate_cert else "ignore",
                operation_timeout_sec=self.cfg.operation_timeout,
                read_timeout_sec=self.cfg.read_timeout,
            )
        return self._winrm

    def _run(self, command: str, options: Dict[str, Any]) -> Tuple[int, str, str]:
        client = self._client()
        try:
            r = retry_operation(
                lambda: client.run_ps(command),
                max_attempts=1 + max(0, self.cfg.retries),
                base_backoff_s=self.cfg.retry_sleep,
                exceptions=_TRANSIENT_ERRORS,
                operation_name="winrm run_ps",
                logger=self.logger,
            )
        except _TRANSIENT_ERRORS as e:
            raise CommunicatorError(msg=f"WinRM transport failure talking to {self.cfg.host}", cause=e).with_context(
                endpoint=self.cfg.endpoint()
            )
        return int(r.status_code), U.to_text(r.std_out), U.to_text(r.std_err)
