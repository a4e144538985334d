# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winguestnet/__main__.py
from __future__ import annotations

import sys
from typing import Any, Optional, Sequence

from .cli.machine import build_machine, requests_from_conf
from .cli.parser import parse_args_with_config
from .cli.render import print_interface_map
from .core.exceptions import WinGuestNetError, format_exception_for_cli
from .core.logger import Log
from .guest.configure import NetworkConfigurator
from .guest.interface_map import InterfaceMapper


def _print_stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def run(args: Any, conf: dict, logger: Any) -> int:
    machine = build_machine(logger, conf)

    if args.show_interfaces:
        interface_map = InterfaceMapper(logger).build_interface_map(machine)
        print_interface_map(interface_map, title=f"{machine.name} ({machine.provider_name})")
        return 0

    requests = requests_from_conf(conf)
    if not requests:
        Log.warn(logger, "No networks configured; nothing to do")
        return 0

    Log.step(logger, f"Configuring {len(requests)} network(s) on {machine.name}")
    NetworkConfigurator(logger).configure_networks(machine, requests)
    Log.ok(logger, "Network configuration applied", machine=machine.name)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    logger: Optional[Any] = None

    try:
        args, conf, logger = parse_args_with_config(argv)
    except WinGuestNetError as e:
        _print_stderr(f"💥 ERROR    {format_exception_for_cli(e)}")
        return e.code
    except KeyboardInterrupt:
        _print_stderr("Interrupted by user (Ctrl+C).")
        return 130

    try:
        return run(args, conf, logger)
    except WinGuestNetError as e:
        Log.fail(logger, format_exception_for_cli(e, verbose=args.verbose))
        return e.code
    except KeyboardInterrupt:
        Log.warn(logger, "Interrupted by user (Ctrl+C).")
        return 130


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
