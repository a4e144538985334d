# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/model.py
"""
Data model shared by the guest network configuration pipeline.

Everything here is transient: a configuration run builds these from the
provider driver and the guest, uses them, and throws them away.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Union

from .core.exceptions import ConfigError

if TYPE_CHECKING:  # pragma: no cover
    from .communicator.base import Communicator
    from .providers.base import Provider

_MAC_SEPARATORS_RE = re.compile(r"[:\-.\s]")

GuestIndex = Union[str, int]


def normalize_mac(mac: Optional[str]) -> str:
    """'aa:bb-cc.dd ee:ff' -> 'AABBCCDDEEFF'"""
    return _MAC_SEPARATORS_RE.sub("", str(mac or "")).upper()


class NetworkType(str, Enum):
    STATIC = "static"
    DHCP = "dhcp"


@dataclass(frozen=True)
class NetworkRequest:
    """One desired interface configuration; `interface` is the 0-based slot."""

    interface: int
    type: str
    ip: Optional[str] = None
    netmask: Optional[str] = None

    def __post_init__(self) -> None:
        t = self.type.value if isinstance(self.type, Enum) else self.type
        object.__setattr__(self, "type", str(t or "").strip().lower())

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "NetworkRequest":
        if "interface" not in d:
            raise ConfigError(msg="network definition is missing 'interface'").with_context(network=dict(d))
        try:
            interface = int(d["interface"])
        except (TypeError, ValueError) as e:
            raise ConfigError(msg=f"network interface must be an integer, got {d['interface']!r}", cause=e)
        return cls(
            interface=interface,
            type=d.get("type") or "",
            ip=d.get("ip"),
            netmask=d.get("netmask"),
        )

    @property
    def slot(self) -> int:
        # Provider/guest side slots are 1-based.
        return self.interface + 1


@dataclass(frozen=True)
class VirtualNicBinding:
    slot: int
    mac_address: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "mac_address", normalize_mac(self.mac_address))


@dataclass(frozen=True)
class GuestAdapter:
    """
    A network adapter as the guest reports it.

    `index` is the Win32_NetworkAdapterConfiguration key used for DHCP state
    queries; `interface_index` is the IP helper index, kept for diagnostics.
    """

    name: Optional[str]
    mac_address: str
    interface_index: Optional[GuestIndex] = None
    index: Optional[GuestIndex] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "mac_address", normalize_mac(self.mac_address))

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "GuestAdapter":
        return cls(
            name=row.get("net_connection_id"),
            mac_address=row.get("mac_address") or "",
            interface_index=row.get("interface_index"),
            index=row.get("index"),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "mac_address": self.mac_address,
            "interface_index": self.interface_index,
            "index": self.index,
        }


InterfaceMap = Dict[int, GuestAdapter]


def interface_map_as_dicts(m: InterfaceMap) -> Dict[int, Dict[str, Any]]:
    return {slot: adapter.as_dict() for slot, adapter in sorted(m.items())}


@dataclass
class WindowsConfig:
    set_work_network: bool = False


@dataclass
class MachineConfig:
    windows: WindowsConfig = field(default_factory=WindowsConfig)


@dataclass
class Machine:
    """Handle for one guest: how to reach it and what backs it."""

    name: str
    provider: "Provider"
    communicate: "Communicator"
    config: MachineConfig = field(default_factory=MachineConfig)

    @property
    def provider_name(self) -> str:
        return self.provider.name
