# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winguestnet/__init__.py
"""
winguestnet - configure network interfaces on Windows guests

Maps the virtualization layer's NIC slots to the guest's adapters by MAC
address and applies static or DHCP IPv4 settings over WinRM or SSH.

Usage as a library:

    from winguestnet import NetworkConfigurator, NetworkRequest

    NetworkConfigurator(logger).configure_networks(machine, [
        NetworkRequest(interface=0, type="dhcp"),
        NetworkRequest(interface=1, type="static", ip="192.168.33.10", netmask="255.255.255.0"),
    ])
"""

__version__ = "0.1.0"

from .guest import (
    AdapterEnumerator,
    DhcpStateChecker,
    InterfaceMapper,
    NetworkConfigurator,
    WorkNetworkToggle,
    build_interface_map,
    configure_networks,
    enumerate_adapters,
    is_dhcp_enabled,
    set_networks_to_work,
)
from .model import GuestAdapter, Machine, MachineConfig, NetworkRequest, NetworkType, WindowsConfig

__all__ = [
    "__version__",
    # Pipeline
    "NetworkConfigurator",
    "InterfaceMapper",
    "AdapterEnumerator",
    "DhcpStateChecker",
    "WorkNetworkToggle",
    "configure_networks",
    "build_interface_map",
    "enumerate_adapters",
    "is_dhcp_enabled",
    "set_networks_to_work",
    # Model
    "NetworkRequest",
    "NetworkType",
    "GuestAdapter",
    "Machine",
    "MachineConfig",
    "WindowsConfig",
]
