# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/cli/render.py
from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table

from ..model import InterfaceMap


def interface_table(interface_map: InterfaceMap, *, title: Optional[str] = None) -> Table:
    table = Table(title=title or "Guest interfaces")
    table.add_column("Slot", justify="right")
    table.add_column("Request interface", justify="right")
    table.add_column("Connection name")
    table.add_column("MAC")
    table.add_column("InterfaceIndex", justify="right")
    table.add_column("Index", justify="right")
    for slot, nic in sorted(interface_map.items()):
        table.add_row(
            str(slot),
            str(slot - 1),
            nic.name or "-",
            nic.mac_address,
            str(nic.interface_index if nic.interface_index is not None else "-"),
            str(nic.index if nic.index is not None else "-"),
        )
    return table


def print_interface_map(interface_map: InterfaceMap, console: Optional[Console] = None, *, title: Optional[str] = None) -> None:
    console = console or Console()
    if not interface_map:
        console.print("[yellow]No guest adapters matched the provider's NICs.[/yellow]")
        return
    console.print(interface_table(interface_map, title=title))
