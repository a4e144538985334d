#!/usr/bin/env python3
# SPDX-License-Identifier: LGPL-3.0-or-later
"""
Example: Configure a Windows guest's networks using the winguestnet library.

This example demonstrates:
- Building a Machine from a libvirt domain and a WinRM connection
- Printing the slot -> guest adapter map
- Applying one DHCP and one static network

Usage:
    WINGUESTNET_PASSWORD=vagrant python library_configure_networks.py win10 192.168.122.50
"""

import logging
import os
import sys

from winguestnet import Machine, MachineConfig, NetworkConfigurator, NetworkRequest, WindowsConfig
from winguestnet.cli.render import print_interface_map
from winguestnet.communicator import WinRMCommunicator, WinRMConfig
from winguestnet.guest import InterfaceMapper
from winguestnet.providers import build_provider

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def configure(domain: str, host: str):
    machine = Machine(
        name=domain,
        provider=build_provider(logger, "libvirt", {"libvirt": {"domain": domain}}),
        communicate=WinRMCommunicator(
            logger, WinRMConfig(host=host, password=os.environ.get("WINGUESTNET_PASSWORD"), retries=2)
        ),
        config=MachineConfig(windows=WindowsConfig(set_work_network=True)),
    )

    # Step 1: Show what the guest looks like
    print_interface_map(InterfaceMapper(logger).build_interface_map(machine), title=domain)

    # Step 2: Apply networks
    NetworkConfigurator(logger).configure_networks(machine, [
        NetworkRequest(interface=0, type="dhcp"),
        NetworkRequest(interface=1, type="static", ip="192.168.33.10", netmask="255.255.255.0"),
    ])
    logger.info("Done")


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(1)
    configure(sys.argv[1], sys.argv[2])
