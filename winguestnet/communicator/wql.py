# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/communicator/wql.py
"""
WQL queries over a communicator.

The query runs through Get-WmiObject and is printed one `Name=Value` line per
property with a `--` line closing each row, which PowerShell 2 can do without
ConvertTo-Json. Result sets come back keyed by the snake_case WMI class name
with snake_case property keys, e.g.

    session.wql("SELECT * FROM Win32_NetworkAdapter WHERE MACAddress IS NOT NULL")
    -> {"win32_network_adapter": [{"mac_address": "52:54:00:12:34:56",
                                   "net_connection_id": "Ethernet", ...}]}
"""
from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .base import Communicator

_FROM_RE = re.compile(r"\bFROM\s+([A-Za-z0-9_]+)", re.IGNORECASE)
_ROW_END = "--"

WqlRow = Dict[str, Optional[str]]

_WQL_SCRIPT = """\
Get-WmiObject -Query '{query}' | ForEach-Object {{
    foreach ($p in $_.Properties) {{
        $v = $p.Value
        if ($p.IsArray -and $v -ne $null) {{ $v = $v -join ',' }}
        Write-Output ('{{0}}={{1}}' -f $p.Name, $v)
    }}
    Write-Output '{row_end}'
}}
"""


def snake_case(name: str) -> str:
    """MACAddress -> mac_address, NetConnectionID -> net_connection_id"""
    s = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name or "")
    s = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s)
    return s.replace("-", "_").lower()


def result_name(query: str) -> str:
    m = _FROM_RE.search(query or "")
    if not m:
        raise ValueError(f"WQL query has no FROM clause: {query!r}")
    return snake_case(m.group(1))


def parse_wql_output(lines: List[str]) -> List[WqlRow]:
    rows: List[WqlRow] = []
    row: WqlRow = {}
    for line in lines:
        text = line.rstrip("\r")
        if text.strip() == _ROW_END:
            rows.append(row)
            row = {}
            continue
        if "=" not in text:
            continue
        key, value = text.split("=", 1)
        row[snake_case(key.strip())] = value if value != "" else None
    if row:
        rows.append(row)
    return rows


class WqlSession:
    def __init__(self, communicator: "Communicator", logger: logging.Logger):
        self._communicator = communicator
        self.logger = logger

    def wql(self, query: str) -> Dict[str, List[WqlRow]]:
        name = result_name(query)
        script = _WQL_SCRIPT.format(query=query.replace("'", "''"), row_end=_ROW_END)
        lines = self._communicator.execute(script)
        rows = parse_wql_output([ln.text for ln in lines if ln.stream == "stdout"])
        self.logger.debug("WQL %r returned %d row(s)", query, len(rows))
        return {name: rows}
