# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for the slot -> guest adapter map."""
from __future__ import annotations

import json
from unittest.mock import Mock

import pytest

from fakes.fake_logger import FakeLogger
from fakes.fake_machine import FakeCommunicator, make_machine
from winguestnet.core.exceptions import UnsupportedProviderError
from winguestnet.guest.interface_map import InterfaceMapper, build_interface_map
from winguestnet.model import GuestAdapter


def _json_comm(*adapters):
    return (
        FakeCommunicator()
        .on("test-wsman", stdout="3")
        .on("ConvertTo-Json", stdout=json.dumps(list(adapters)))
    )


def _nic(mac, name, interface_index, index):
    return {"MACAddress": mac, "NetConnectionID": name, "InterfaceIndex": interface_index, "Index": index}


@pytest.mark.unit
class TestInterfaceMapper:
    def test_matches_normalized_macs(self):
        comm = _json_comm(_nic("AA:BB:CC:DD:EE:FF", "Ethernet", 11, 7))
        machine = make_machine(macs={1: "AABBCCDDEEFF"}, communicator=comm)

        result = build_interface_map(machine)

        assert result == {1: GuestAdapter(name="Ethernet", mac_address="AABBCCDDEEFF", interface_index=11, index=7)}

    def test_driver_mac_formatting_is_ignored(self):
        comm = _json_comm(_nic("aa-bb-cc-dd-ee-ff", "Ethernet", 11, 7))
        machine = make_machine(macs={2: "aa:bb:cc:dd:ee:ff"}, communicator=comm)

        assert list(InterfaceMapper().build_interface_map(machine)) == [2]

    def test_unknown_guest_macs_are_omitted(self):
        logger = FakeLogger()
        comm = _json_comm(
            _nic("52:54:00:00:00:01", "Ethernet", 11, 7),
            _nic("00:15:5D:00:00:99", "vEthernet (Default Switch)", 30, 20),
        )
        machine = make_machine(macs={1: "525400000001"}, communicator=comm)

        result = InterfaceMapper(logger).build_interface_map(machine)

        assert list(result) == [1]
        assert any("vEthernet (Default Switch)" in m for m in logger.messages("debug"))

    def test_driver_slot_without_guest_adapter_is_absent(self):
        comm = _json_comm(_nic("52:54:00:00:00:01", "Ethernet", 11, 7))
        machine = make_machine(macs={1: "525400000001", 2: "525400000002"}, communicator=comm)

        result = InterfaceMapper().build_interface_map(machine)

        assert 2 not in result

    def test_last_adapter_wins_on_duplicate_mac(self):
        comm = _json_comm(
            _nic("AA:BB:CC:DD:EE:FF", "Physical", 11, 7),
            _nic("AA:BB:CC:DD:EE:FF", "vEthernet", 40, 21),
        )
        machine = make_machine(macs={1: "AABBCCDDEEFF"}, communicator=comm)

        result = InterfaceMapper().build_interface_map(machine)

        assert result[1].name == "vEthernet"
        assert result[1].index == 21

    @pytest.mark.parametrize("provider", ["vmware_fusion", "vmware_workstation", "VMware_Fusion"])
    def test_excluded_providers_raise(self, provider):
        enumerator = Mock()
        machine = make_machine(provider=provider, macs={1: "525400000001"})

        with pytest.raises(UnsupportedProviderError) as ei:
            InterfaceMapper(enumerator=enumerator).build_interface_map(machine)

        assert ei.value.context["provider"] == provider.lower()
        enumerator.enumerate_adapters.assert_not_called()
        assert machine.provider.driver.calls == 0

    def test_uses_injected_enumerator(self):
        enumerator = Mock()
        enumerator.enumerate_adapters.return_value = [GuestAdapter(name="Ethernet", mac_address="525400000001", index=3)]
        machine = make_machine(macs={1: "52:54:00:00:00:01"})

        result = InterfaceMapper(enumerator=enumerator).build_interface_map(machine)

        assert result[1].index == 3
        enumerator.enumerate_adapters.assert_called_once_with(machine)
