# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/guest/dhcp.py
from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..communicator.base import OutputLine
from ..core.logging_utils import safe_logger
from ..model import GuestIndex, Machine


def dhcp_query(index: GuestIndex) -> str:
    return (
        "Get-WmiObject -Class Win32_NetworkAdapterConfiguration "
        f'-Filter "Index={index} and DHCPEnabled=True"'
    )


def any_output_means_enabled(lines: Sequence[OutputLine]) -> bool:
    """
    The query is filtered on DHCPEnabled=True, so any output line at all is
    read as "enabled" and silence as "disabled".

    Known weak points:
      - a query that comes back empty for any other reason (transient WMI
        trouble on the guest) reads as "disabled";
      - stderr lines count as output, so a query that matches nothing but
        still writes a CLIXML progress block to stderr (pywinrm run_ps passes
        it through) reads as "enabled" and the dhcp command is skipped.
    """
    return len(lines) > 0


class DhcpStateChecker:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = safe_logger(logger, "winguestnet.guest.dhcp")

    def is_dhcp_enabled(self, machine: Machine, index: GuestIndex) -> bool:
        lines = machine.communicate.execute(dhcp_query(index))
        enabled = any_output_means_enabled(lines)
        self.logger.debug("DHCP is %s for adapter index %s", "enabled" if enabled else "disabled", index)
        return enabled


def is_dhcp_enabled(machine: Machine, index: GuestIndex, logger: Optional[logging.Logger] = None) -> bool:
    return DhcpStateChecker(logger).is_dhcp_enabled(machine, index)
