# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/guest/__init__.py
"""
Windows guest network configuration.

    - adapters: guest adapter inventory (WQL on WinRM 2, CIM/JSON on 3+)
    - interface_map: provider slot -> guest adapter correlation by MAC
    - dhcp: DHCP state query
    - configure: NetworkConfigurator, the entry point
    - work_network: Work/Private network profile toggle
"""

from .adapters import AdapterEnumerator, enumerate_adapters
from .configure import NetworkConfigurator, configure_networks
from .dhcp import DhcpStateChecker, is_dhcp_enabled
from .interface_map import InterfaceMapper, build_interface_map
from .work_network import WorkNetworkToggle, set_networks_to_work

__all__ = [
    "AdapterEnumerator",
    "InterfaceMapper",
    "DhcpStateChecker",
    "NetworkConfigurator",
    "WorkNetworkToggle",
    "enumerate_adapters",
    "build_interface_map",
    "is_dhcp_enabled",
    "configure_networks",
    "set_networks_to_work",
]
