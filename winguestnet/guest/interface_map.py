# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/guest/interface_map.py
from __future__ import annotations

import logging
from typing import Dict, Optional

from ..core.exceptions import UnsupportedProviderError
from ..core.logging_utils import safe_logger
from ..model import InterfaceMap, Machine, interface_map_as_dicts
from .adapters import AdapterEnumerator


class InterfaceMapper:
    """
    Joins the provider's slot -> MAC bindings with the guest's adapters.

    Result, e.g.:
      {1: GuestAdapter(name="Local Area Connection", mac_address="0800275FAC5B",
                       interface_index="11", index="7")}
    """

    def __init__(self, logger: Optional[logging.Logger] = None, enumerator: Optional[AdapterEnumerator] = None):
        self.logger = safe_logger(logger, "winguestnet.guest.interface_map")
        self.enumerator = enumerator or AdapterEnumerator(self.logger)

    def build_interface_map(self, machine: Machine) -> InterfaceMap:
        if not machine.provider.supports_driver_mac_correlation:
            raise UnsupportedProviderError(
                msg=f"provider {machine.provider_name} cannot correlate driver MACs with guest adapters"
            ).with_context(provider=machine.provider_name)

        slot_by_mac: Dict[str, int] = {b.mac_address: b.slot for b in machine.provider.driver.nic_bindings()}
        self.logger.debug("Driver mac addresses: %s", slot_by_mac)

        interface_map: InterfaceMap = {}
        for nic in self.enumerator.enumerate_adapters(machine):
            slot = slot_by_mac.get(nic.mac_address)
            if slot is None:
                self.logger.debug("Guest adapter %s (%s) has no provider NIC", nic.name, nic.mac_address)
                continue
            # last adapter reported for a MAC wins (team/vSwitch NICs follow the physical one)
            interface_map[slot] = nic

        self.logger.debug("Interface map: %s", interface_map_as_dicts(interface_map))
        return interface_map


def build_interface_map(machine: Machine, logger: Optional[logging.Logger] = None) -> InterfaceMap:
    return InterfaceMapper(logger).build_interface_map(machine)
