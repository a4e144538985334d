# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/cli/machine.py
"""Build a Machine handle and the request list from the effective config."""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..communicator import build_communicator
from ..core.exceptions import ConfigError
from ..model import Machine, MachineConfig, NetworkRequest, WindowsConfig
from ..providers import build_provider


def build_machine(logger: logging.Logger, conf: Dict[str, Any]) -> Machine:
    name = str(conf.get("machine") or (conf.get("libvirt") or {}).get("domain") or "default")
    windows = conf.get("windows") or {}
    return Machine(
        name=name,
        provider=build_provider(logger, str(conf.get("provider") or ""), conf),
        communicate=build_communicator(logger, conf.get("communicator") or {}),
        config=MachineConfig(windows=WindowsConfig(set_work_network=bool(windows.get("set_work_network", False)))),
    )


def requests_from_conf(conf: Dict[str, Any]) -> List[NetworkRequest]:
    networks = conf.get("networks") or []
    if not isinstance(networks, list):
        raise ConfigError(msg="'networks' must be a list of network definitions")
    out: List[NetworkRequest] = []
    for n in networks:
        if not isinstance(n, dict):
            raise ConfigError(msg=f"network definition must be a mapping, got {n!r}")
        out.append(NetworkRequest.from_dict(n))
    return out
