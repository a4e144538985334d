# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/guest/adapters.py
"""
Guest network adapter inventory.

Two techniques, chosen by the guest's WinRM (WS-Management) major version:

  - v2: WQL `SELECT * FROM Win32_NetworkAdapter WHERE MACAddress IS NOT NULL`
        through the communicator's query session.
  - v3 and newer: a PowerShell script over Get-CimInstance that emits the
        adapters as JSON. Output can arrive split across several lines, so
        stdout is concatenated before parsing.
"""
from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from ..communicator.base import stdout_text
from ..communicator.wql import snake_case
from ..core.exceptions import AdapterParseError, ProtocolDetectionError
from ..core.logging_utils import safe_logger
from ..model import GuestAdapter, Machine

WSMAN_VERSION_PROBE = '((test-wsman).productversion.split(" ") | select -last 1).split("\\.")[0]'

ADAPTER_WQL = "SELECT * FROM Win32_NetworkAdapter WHERE MACAddress IS NOT NULL"
ADAPTER_RESULT_SET = "win32_network_adapter"

ADAPTER_JSON_SCRIPT = """\
$adapters = Get-CimInstance -ClassName Win32_NetworkAdapter -Filter "MACAddress IS NOT NULL" |
    Select-Object MACAddress, NetConnectionID, InterfaceIndex, Index
ConvertTo-Json -Compress -InputObject @($adapters)
"""


class AdapterEnumerator:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = safe_logger(logger, "winguestnet.guest.adapters")

    def detect_protocol_version(self, machine: Machine) -> int:
        self.logger.debug("Checking WSMan version")
        lines = machine.communicate.execute(WSMAN_VERSION_PROBE)
        raw = stdout_text(lines).strip()
        self.logger.debug("WSMan version probe output: %r", raw)
        try:
            return int(raw)
        except ValueError as e:
            raise ProtocolDetectionError(
                msg=f"WSMan version probe returned non-numeric output {raw!r}", cause=e
            ).with_context(machine=machine.name)

    def enumerate_adapters(self, machine: Machine) -> List[GuestAdapter]:
        version = self.detect_protocol_version(machine)
        self.logger.debug("WSMan major version: %d", version)
        if version == 2:
            adapters = self._from_wql(machine)
        else:
            adapters = self._from_json_script(machine)
        for nic in adapters:
            self.logger.debug("Guest adapter: %s", nic)
        return adapters

    def _from_wql(self, machine: Machine) -> List[GuestAdapter]:
        self.logger.debug("Using WQL adapter query")
        rows = machine.communicate.session.wql(ADAPTER_WQL).get(ADAPTER_RESULT_SET) or []
        return [GuestAdapter.from_row(row) for row in rows]

    def _from_json_script(self, machine: Machine) -> List[GuestAdapter]:
        self.logger.debug("Using CIM/JSON adapter script")
        output = stdout_text(machine.communicate.execute(ADAPTER_JSON_SCRIPT))
        self.logger.debug("Adapter script output: %s", output)
        return [GuestAdapter.from_row(row) for row in parse_adapter_json(output)]


def parse_adapter_json(output: str) -> List[dict]:
    """
    Parse the ConvertTo-Json adapter listing into snake_case rows.

    A lone object (what ConvertTo-Json emits for a single element on some
    PowerShell versions) is treated as a one-element array.
    """
    if not (output or "").strip():
        raise AdapterParseError(msg="adapter script produced no output")
    try:
        data: Any = json.loads(output)
    except json.JSONDecodeError as e:
        raise AdapterParseError(msg=f"adapter script output is not valid JSON: {e}", cause=e).with_context(
            output=output[:200]
        )

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise AdapterParseError(msg="adapter script output is not a list of objects").with_context(
            output=output[:200]
        )
    return [{snake_case(k): v for k, v in item.items()} for item in data]


def enumerate_adapters(machine: Machine, logger: Optional[logging.Logger] = None) -> List[GuestAdapter]:
    return AdapterEnumerator(logger).enumerate_adapters(machine)
