# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for two-phase CLI parsing (config files as defaults, CLI wins)."""
from __future__ import annotations

import json
import logging

import pytest

from winguestnet.cli.parser import CLI_BINDINGS, build_parser, parse_args_with_config
from winguestnet.core.exceptions import ConfigError

LOG = logging.getLogger("tests.cli.parser")

GUEST_YAML = """\
machine: win10
provider: libvirt
libvirt:
  domain: win10-dom
communicator:
  transport: winrm
  host: 192.168.122.50
  user: vagrant
windows:
  set_work_network: true
networks:
  - interface: 0
    type: dhcp
"""


@pytest.fixture
def guest_yaml(tmp_path):
    p = tmp_path / "guest.yaml"
    p.write_text(GUEST_YAML, encoding="utf-8")
    return p


@pytest.mark.unit
class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.config == []
        assert args.verbose == 0
        assert args.set_work_network is None
        assert args.show_interfaces is False

    def test_work_network_switches(self):
        p = build_parser()
        assert p.parse_args(["--set-work-network"]).set_work_network is True
        assert p.parse_args(["--no-set-work-network"]).set_work_network is False

    def test_transport_choices(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--transport", "telnet"])

    def test_every_binding_has_a_flag(self):
        dests = {a.dest for a in build_parser()._actions}
        assert set(CLI_BINDINGS.values()) <= dests


@pytest.mark.unit
class TestParseArgsWithConfig:
    def test_config_only(self, guest_yaml):
        args, conf, logger = parse_args_with_config(["--config", str(guest_yaml)], logger=LOG)

        assert logger is LOG
        assert args.host == "192.168.122.50"
        assert args.domain == "win10-dom"
        assert args.set_work_network is True
        assert conf["networks"] == [{"interface": 0, "type": "dhcp"}]

    def test_cli_overrides_config(self, guest_yaml):
        args, conf, _ = parse_args_with_config(
            ["--config", str(guest_yaml), "--host", "10.0.0.9", "--transport", "ssh", "--port", "2222",
             "--no-set-work-network"],
            logger=LOG,
        )

        assert conf["communicator"]["host"] == "10.0.0.9"
        assert conf["communicator"]["transport"] == "ssh"
        assert conf["communicator"]["port"] == 2222
        assert conf["communicator"]["user"] == "vagrant"
        assert conf["windows"]["set_work_network"] is False

    def test_no_config(self):
        args, conf, _ = parse_args_with_config(["--host", "win10", "--provider", "libvirt"], logger=LOG)

        assert conf == {"communicator": {"host": "win10"}, "provider": "libvirt"}

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(ConfigError):
            parse_args_with_config(["--config", str(tmp_path / "missing.yaml")], logger=LOG)

    def test_dump_config(self, guest_yaml, capsys):
        with pytest.raises(SystemExit) as ei:
            parse_args_with_config(["--config", str(guest_yaml), "--dump-config"], logger=LOG)

        assert ei.value.code == 0
        dumped = json.loads(capsys.readouterr().out)
        assert dumped["provider"] == "libvirt"
