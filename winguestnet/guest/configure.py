# SPDX-License-Identifier: LGPL-3.0-or-later
# winguestnet/guest/configure.py
"""
Apply network requests to a Windows guest.

Flow per call:
  1) build the slot -> guest adapter map once (skipped for providers that
     cannot correlate MACs; every request then goes unresolved)
  2) walk requests in order; request.interface is 0-based, map slots are
     1-based
  3) static -> netsh static address; dhcp -> netsh dhcp unless already on
  4) optionally flip networks to the Work profile

An unresolved slot is logged and skipped. An unknown network type stops the
whole batch; requests already applied stay applied.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from ..core.exceptions import ConfigError, InterfaceNotFound, UnsupportedNetworkTypeError
from ..core.logger import Log
from ..core.logging_utils import log_step, safe_logger
from ..model import GuestAdapter, InterfaceMap, Machine, NetworkRequest, NetworkType
from .dhcp import DhcpStateChecker
from .interface_map import InterfaceMapper
from .work_network import WorkNetworkToggle

RequestLike = Union[NetworkRequest, Mapping[str, Any]]


def _netsh_set_address(name: Optional[str]) -> str:
    return f'netsh interface ip set address "{name}"'


def static_address_command(name: Optional[str], ip: str, netmask: str) -> str:
    return f"{_netsh_set_address(name)} static {ip} {netmask}"


def dhcp_command(name: Optional[str]) -> str:
    return f"{_netsh_set_address(name)} dhcp"


def as_requests(networks: Iterable[RequestLike]) -> List[NetworkRequest]:
    return [n if isinstance(n, NetworkRequest) else NetworkRequest.from_dict(n) for n in networks]


def resolve_interface(interface_map: InterfaceMap, request: NetworkRequest) -> GuestAdapter:
    adapter = interface_map.get(request.slot)
    if adapter is None:
        raise InterfaceNotFound(msg=f"Could not find interface for network {request}").with_context(
            slot=request.slot
        )
    return adapter


class NetworkConfigurator:
    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        mapper: Optional[InterfaceMapper] = None,
        dhcp: Optional[DhcpStateChecker] = None,
        work_network: Optional[WorkNetworkToggle] = None,
    ):
        self.logger = safe_logger(logger, "winguestnet.guest.configure")
        self.mapper = mapper or InterfaceMapper(self.logger)
        self.dhcp = dhcp or DhcpStateChecker(self.logger)
        self.work_network = work_network or WorkNetworkToggle(self.logger)

    def configure_networks(self, machine: Machine, networks: Iterable[RequestLike]) -> None:
        requests = as_requests(networks)
        log = Log.bind(self.logger, machine=machine.name)
        log.debug("networks: %s", requests)

        interface_map: InterfaceMap = {}
        if machine.provider.supports_driver_mac_correlation:
            with log_step(log, "Building interface map"):
                interface_map = self.mapper.build_interface_map(machine)
        else:
            Log.warn(log, "Provider cannot map guest interfaces by MAC; networks will not resolve",
                     provider=machine.provider_name)

        for request in requests:
            try:
                adapter = resolve_interface(interface_map, request)
            except InterfaceNotFound as e:
                Log.warn(log, str(e), slot=request.slot)
                continue
            self.configure_interface(machine, request, adapter)

        if machine.config.windows.set_work_network:
            self.work_network.set_networks_to_work(machine)

    def configure_interface(self, machine: Machine, request: NetworkRequest, adapter: GuestAdapter) -> None:
        self.logger.info("Configuring interface %s", adapter.as_dict())

        if request.type == NetworkType.STATIC.value:
            if not request.ip or not request.netmask:
                raise ConfigError(msg=f"static network needs ip and netmask: {request}")
            machine.communicate.execute(static_address_command(adapter.name, request.ip, request.netmask))
        elif request.type == NetworkType.DHCP.value:
            # netsh errors out when DHCP is already enabled on the interface
            if not self.dhcp.is_dhcp_enabled(machine, adapter.index):
                machine.communicate.execute(dhcp_command(adapter.name))
        else:
            raise UnsupportedNetworkTypeError(
                msg=f"{request.type} network type is not supported, try static or dhcp"
            ).with_context(network_type=request.type, slot=request.slot)


def configure_networks(
    machine: Machine, networks: Iterable[RequestLike], logger: Optional[logging.Logger] = None
) -> None:
    NetworkConfigurator(logger).configure_networks(machine, networks)
