# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/communicator/__init__.py
"""
Remote execution channels to a Windows guest.

    - base: Communicator contract, OutputLine
    - wql: WQL query session layered on a communicator
    - winrm_comm: pywinrm transport
    - ssh_comm / ssh_config: OpenSSH transport
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from ..core.exceptions import ConfigError
from .base import STDERR, STDOUT, Communicator, OutputLine, stdout_text
from .ssh_comm import SSHCommunicator
from .ssh_config import SSHConfig
from .winrm_comm import WinRMCommunicator, WinRMConfig
from .wql import WqlSession, snake_case


def _resolve_password(settings: Dict[str, Any]) -> Optional[str]:
    direct = settings.get("password")
    if direct:
        return str(direct)
    envname = settings.get("password_env")
    if envname:
        return os.environ.get(str(envname))
    return None


def build_communicator(logger: logging.Logger, settings: Dict[str, Any]) -> Communicator:
    """Build a communicator from the `communicator:` config section."""
    transport = str(settings.get("transport") or "winrm").strip().lower()
    host = settings.get("host")
    if not host:
        raise ConfigError(msg="communicator.host is required (or --host)")

    if transport == "winrm":
        cfg = WinRMConfig(
            host=str(host),
            user=str(settings.get("user") or "vagrant"),
            password=_resolve_password(settings),
            port=int(settings.get("port") or (5986 if settings.get("ssl") else 5985)),
            ssl=bool(settings.get("ssl", False)),
            transport=str(settings.get("winrm_transport") or "ntlm"),
            validate_cert=bool(settings.get("validate_cert", False)),
            operation_timeout=int(settings.get("operation_timeout") or 60),
            read_timeout=int(settings.get("read_timeout") or 70),
            retries=int(settings.get("retries") or 0),
            retry_sleep=float(settings.get("retry_sleep") or 1.0),
        )
        return WinRMCommunicator(logger, cfg)

    if transport == "ssh":
        cfg_ssh = SSHConfig(
            host=str(host),
            user=str(settings.get("user") or "Administrator"),
            port=int(settings.get("port") or 22),
            identity=settings.get("identity"),
            ssh_opts=list(settings.get("ssh_opts") or []),
            connect_timeout=int(settings.get("connect_timeout") or 10),
            jump_host=settings.get("jump_host"),
            strict_host_key_checking=bool(settings.get("strict_host_key_checking", False)),
            known_hosts_file=settings.get("known_hosts_file"),
            retries=int(settings.get("retries") or 0),
            retry_sleep=float(settings.get("retry_sleep") or 1.0),
        )
        return SSHCommunicator(logger, cfg_ssh)

    raise ConfigError(msg=f"unknown communicator transport {transport!r} (expected winrm or ssh)")


__all__ = [
    "STDOUT",
    "STDERR",
    "Communicator",
    "OutputLine",
    "stdout_text",
    "WqlSession",
    "snake_case",
    "WinRMCommunicator",
    "WinRMConfig",
    "SSHCommunicator",
    "SSHConfig",
    "build_communicator",
]
