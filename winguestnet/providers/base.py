# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/providers/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List

from ..model import VirtualNicBinding

# Back-ends whose driver MACs cannot be correlated with guest adapters.
MAC_CORRELATION_UNSUPPORTED: FrozenSet[str] = frozenset({"vmware_fusion", "vmware_workstation"})


class ProviderDriver(ABC):
    """Virtualization-side view of a guest's NICs."""

    @abstractmethod
    def read_mac_addresses(self) -> Dict[int, str]:
        """Return {slot: mac} with 1-based slots."""
        raise NotImplementedError

    def nic_bindings(self) -> List[VirtualNicBinding]:
        return [VirtualNicBinding(int(slot), mac) for slot, mac in sorted(self.read_mac_addresses().items())]


def supports_driver_mac_correlation(provider_name: str) -> bool:
    return (provider_name or "").strip().lower() not in MAC_CORRELATION_UNSUPPORTED


@dataclass
class Provider:
    name: str
    driver: ProviderDriver
    supports_driver_mac_correlation: bool = field(init=False)

    def __post_init__(self) -> None:
        self.name = (self.name or "").strip().lower()
        self.supports_driver_mac_correlation = supports_driver_mac_correlation(self.name)
