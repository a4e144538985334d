# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/guest/work_network.py
"""
Mark unidentified networks as Work/Private, so Windows 7 style guests accept
host access over a private IP.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..core.logging_utils import safe_logger
from ..model import Machine
from .assets import load_script

WORK_NETWORK_SCRIPT = "set_work_network.ps1"


class WorkNetworkToggle:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = safe_logger(logger, "winguestnet.guest.work_network")

    def set_networks_to_work(self, machine: Machine) -> None:
        self.logger.info("Setting networks to 'Work Network'")
        machine.communicate.execute(load_script(WORK_NETWORK_SCRIPT))


def set_networks_to_work(machine: Machine, logger: Optional[logging.Logger] = None) -> None:
    WorkNetworkToggle(logger).set_networks_to_work(machine)
