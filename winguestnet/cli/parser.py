# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# winguestnet/cli/parser.py
from __future__ import annotations

import argparse
from typing import Any, Dict, Optional, Sequence, Tuple

from ..config.config_loader import Config
from ..core.logger import Log, c
from ..core.utils import U

# dotted config key -> argparse dest
CLI_BINDINGS: Dict[str, str] = {
    "machine": "machine",
    "provider": "provider",
    "libvirt.domain": "domain",
    "libvirt.connect_uri": "connect_uri",
    "communicator.transport": "transport",
    "communicator.host": "host",
    "communicator.port": "port",
    "communicator.user": "user",
    "communicator.password_env": "password_env",
    "windows.set_work_network": "set_work_network",
}

_EPILOG = """\
examples:
  winguestnet --config guest.yaml
  winguestnet --config guest.yaml --host 192.168.122.50 --transport ssh -vv
  winguestnet --config guest.yaml --show-interfaces
"""


def _add_global_config_logging(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group("config / logging")
    g.add_argument("--config", action="append", default=[], help="YAML config file (repeatable, globs ok).")
    g.add_argument("-v", "--verbose", action="count", default=0, help="-v info, -vv debug, -vvv trace.")
    g.add_argument("-q", "--quiet", action="count", default=0, help="-q warnings only, -qq errors only.")
    g.add_argument("--log-file", dest="log_file", default=None, help="Also log to this file.")
    g.add_argument("--json-logs", dest="json_logs", action="store_true", help="NDJSON log lines.")
    g.add_argument("--dump-config", action="store_true", help="Print the merged config and exit.")


def _add_machine_knobs(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group("machine / provider")
    g.add_argument("--machine", default=None, help="Machine display name.")
    g.add_argument("--provider", default=None, help="libvirt, vmware_workstation, vmware_fusion, ...")
    g.add_argument("--domain", default=None, help="libvirt domain name.")
    g.add_argument("--connect-uri", dest="connect_uri", default=None, help="libvirt connection URI.")


def _add_communicator_knobs(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group("communicator")
    g.add_argument("--transport", choices=["winrm", "ssh"], default=None)
    g.add_argument("--host", default=None, help="Guest address.")
    g.add_argument("--port", type=int, default=None)
    g.add_argument("--user", default=None)
    g.add_argument("--password-env", dest="password_env", default=None, help="Env var holding the password.")


def _add_actions(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group("actions")
    g.add_argument(
        "--set-work-network",
        dest="set_work_network",
        action="store_const",
        const=True,
        default=None,
        help="Mark unidentified networks as Work/Private after configuring.",
    )
    g.add_argument("--no-set-work-network", dest="set_work_network", action="store_const", const=False)
    g.add_argument(
        "--show-interfaces",
        action="store_true",
        help="Print the slot -> guest adapter map and exit without configuring.",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="winguestnet",
        description=c("winguestnet: configure Windows guest network interfaces", "green", ["bold"]),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_EPILOG,
    )
    _add_global_config_logging(p)
    _add_machine_knobs(p)
    _add_communicator_knobs(p)
    _add_actions(p)
    return p


def _build_preparser() -> argparse.ArgumentParser:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", action="append", default=[])
    pre.add_argument("-v", "--verbose", action="count", default=0)
    pre.add_argument("-q", "--quiet", action="count", default=0)
    pre.add_argument("--log-file", dest="log_file", default=None)
    pre.add_argument("--json-logs", dest="json_logs", action="store_true")
    pre.add_argument("--dump-config", action="store_true")
    return pre


def parse_args_with_config(
    argv: Optional[Sequence[str]] = None,
    logger: Any = None,
) -> Tuple[argparse.Namespace, Dict[str, Any], Any]:
    """
    Phase 0: parse only the flags needed to find config and set up logging
    Phase 1: load + merge config files
    Phase 2: apply config values as parser defaults
    Phase 3: full parse; CLI wins
    Phase 4: fold CLI values back into an effective config

    Returns (args, effective config, logger).
    """
    import sys

    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    pre = _build_preparser()
    args0, _rest = pre.parse_known_args(argv)

    if logger is None:
        logger = Log.setup(args0.verbose, args0.log_file, quiet=args0.quiet, json_logs=args0.json_logs)

    conf: Dict[str, Any] = {}
    if args0.config:
        conf = Config.load_many(logger, Config.expand_configs(logger, args0.config))

    if args0.dump_config:
        print(U.json_dump(conf))
        raise SystemExit(0)

    parser = build_parser()
    Config.apply_as_defaults(logger, parser, conf, CLI_BINDINGS)
    args = parser.parse_args(argv)

    return args, Config.with_overrides(conf, args, CLI_BINDINGS), logger
