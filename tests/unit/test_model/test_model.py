# SPDX-License-Identifier: LGPL-3.0-or-later
import unittest

from fakes.fake_machine import make_machine
from winguestnet.core.exceptions import ConfigError
from winguestnet.model import (
    GuestAdapter,
    NetworkRequest,
    NetworkType,
    VirtualNicBinding,
    interface_map_as_dicts,
    normalize_mac,
)


class TestNormalizeMac(unittest.TestCase):
    def test_separators_and_case(self):
        self.assertEqual(normalize_mac("aa:bb:cc:dd:ee:ff"), "AABBCCDDEEFF")
        self.assertEqual(normalize_mac("AA-BB-CC-DD-EE-FF"), "AABBCCDDEEFF")
        self.assertEqual(normalize_mac("aabb.ccdd.eeff"), "AABBCCDDEEFF")
        self.assertEqual(normalize_mac(None), "")


class TestNetworkRequest(unittest.TestCase):
    def test_slot_is_one_based(self):
        self.assertEqual(NetworkRequest(interface=0, type="dhcp").slot, 1)

    def test_type_normalized(self):
        self.assertEqual(NetworkRequest(interface=0, type=" DHCP ").type, "dhcp")
        self.assertEqual(NetworkRequest(interface=0, type=NetworkType.STATIC).type, "static")

    def test_from_dict(self):
        req = NetworkRequest.from_dict({"interface": "2", "type": "static", "ip": "10.0.0.2", "netmask": "255.0.0.0"})
        self.assertEqual(req, NetworkRequest(interface=2, type="static", ip="10.0.0.2", netmask="255.0.0.0"))

    def test_from_dict_errors(self):
        with self.assertRaises(ConfigError):
            NetworkRequest.from_dict({"type": "dhcp"})
        with self.assertRaises(ConfigError):
            NetworkRequest.from_dict({"interface": "eth0", "type": "dhcp"})

    def test_unknown_type_kept(self):
        self.assertEqual(NetworkRequest.from_dict({"interface": 0, "type": "bridge"}).type, "bridge")


class TestAdapters(unittest.TestCase):
    def test_binding_normalizes(self):
        self.assertEqual(VirtualNicBinding(1, "52:54:00:aa:bb:cc").mac_address, "525400AABBCC")

    def test_from_row(self):
        nic = GuestAdapter.from_row(
            {"mac_address": "08:00:27:5f:ac:5b", "net_connection_id": "Ethernet", "interface_index": 11, "index": 7}
        )
        self.assertEqual(nic, GuestAdapter(name="Ethernet", mac_address="0800275FAC5B", interface_index=11, index=7))

    def test_map_as_dicts(self):
        m = {2: GuestAdapter(name="b", mac_address="02"), 1: GuestAdapter(name="a", mac_address="01", index=3)}
        self.assertEqual(
            interface_map_as_dicts(m),
            {
                1: {"name": "a", "mac_address": "01", "interface_index": None, "index": 3},
                2: {"name": "b", "mac_address": "02", "interface_index": None, "index": None},
            },
        )

    def test_machine_provider_name(self):
        self.assertEqual(make_machine(provider="LibVirt").provider_name, "libvirt")
