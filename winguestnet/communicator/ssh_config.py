# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winguestnet/communicator/ssh_config.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..core.exceptions import ConfigError


def _clean_opt(opt: str) -> str:
    # One line, collapsed whitespace.
    o = (opt or "").strip().replace("\r", " ").replace("\n", " ")
    return " ".join(o.split())


@dataclass(frozen=True)
class SSHConfig:
    """
    Connection settings for a Windows guest running the OpenSSH server.

    Non-interactive by default (BatchMode, no TTY) so it is safe in CI.
    """
    host: str
    user: str = "Administrator"
    port: int = 22
    identity: Optional[Path] = None
    ssh_opts: List[str] = field(default_factory=list)

    connect_timeout: int = 10
    keepalive_interval: int = 30
    keepalive_count: int = 3

    jump_host: Optional[str] = None          # ProxyJump
    strict_host_key_checking: bool = False   # throwaway guests change keys
    known_hosts_file: Optional[Path] = None

    # transport retry policy (exit 255 / connection-level errors only)
    retries: int = 0
    retry_sleep: float = 1.0

    def __post_init__(self) -> None:
        host = (self.host or "").strip()
        if not host:
            raise ConfigError(msg="SSHConfig.host must not be empty")
        object.__setattr__(self, "host", host)

        user = (self.user or "").strip()
        if not user:
            raise ConfigError(msg="SSHConfig.user must not be empty")
        object.__setattr__(self, "user", user)

        if self.identity is not None:
            object.__setattr__(self, "identity", Path(self.identity).expanduser())
        if self.known_hosts_file is not None:
            object.__setattr__(self, "known_hosts_file", Path(self.known_hosts_file).expanduser())
        if self.jump_host is not None:
            object.__setattr__(self, "jump_host", self.jump_host.strip() or None)

        cleaned: List[str] = []
        for opt in self.ssh_opts or []:
            o = _clean_opt(opt)
            if o and o not in cleaned:
                cleaned.append(o)
        object.__setattr__(self, "ssh_opts", cleaned)

        if self.port <= 0 or self.port > 65535:
            raise ConfigError(msg=f"Invalid SSH port: {self.port}")

        for name, v in (
            ("connect_timeout", self.connect_timeout),
            ("keepalive_interval", self.keepalive_interval),
            ("keepalive_count", self.keepalive_count),
            ("retries", self.retries),
        ):
            if v < 0:
                raise ConfigError(msg=f"{name} must be >= 0 (got {v})")

    def target(self) -> str:
        host = self.host
        if ":" in host and not host.startswith("["):
            host = f"[{host}]"
        return f"{self.user}@{host}"

    def _append_hostkey_policy(self, cmd: List[str]) -> None:
        cmd += ["-o", f"StrictHostKeyChecking={'yes' if self.strict_host_key_checking else 'no'}"]
        if self.known_hosts_file is not None:
            cmd += ["-o", f"UserKnownHostsFile={self.known_hosts_file}"]
        elif not self.strict_host_key_checking:
            cmd += ["-o", "UserKnownHostsFile=/dev/null"]

    def base_cmd(self) -> List[str]:
        cmd: List[str] = [
            "ssh",
            "-p", str(self.port),
            "-o", "BatchMode=yes",
            "-o", f"ConnectTimeout={self.connect_timeout}",
            "-o", f"ServerAliveInterval={self.keepalive_interval}",
            "-o", f"ServerAliveCountMax={self.keepalive_count}",
        ]
        self._append_hostkey_policy(cmd)

        if self.identity:
            cmd += ["-i", str(self.identity)]
        if self.jump_host:
            cmd += ["-J", self.jump_host]
        for opt in self.ssh_opts:
            cmd += ["-o", opt]

        cmd.append(self.target())
        return cmd

    def describe(self) -> str:
        parts = [f"{self.user}@{self.host}:{self.port}"]
        if self.identity:
            parts.append(f"key={self.identity}")
        if self.jump_host:
            parts.append(f"via={self.jump_host}")
        parts.append("hostkey=strict" if self.strict_host_key_checking else "hostkey=off")
        return " ".join(parts)
