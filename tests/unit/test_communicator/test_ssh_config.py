# SPDX-License-Identifier: LGPL-3.0-or-later
import unittest
from pathlib import Path

from winguestnet.communicator.ssh_config import SSHConfig
from winguestnet.core.exceptions import ConfigError


class TestSSHConfig(unittest.TestCase):
    """Test SSH configuration dataclass."""

    def test_default_config(self):
        config = SSHConfig(host="192.168.122.50")
        self.assertEqual(config.port, 22)
        self.assertEqual(config.user, "Administrator")
        self.assertIsNone(config.identity)
        self.assertFalse(config.strict_host_key_checking)

    def test_host_is_stripped_and_required(self):
        self.assertEqual(SSHConfig(host="  win10  ").host, "win10")
        with self.assertRaises(ConfigError):
            SSHConfig(host="   ")

    def test_invalid_port(self):
        with self.assertRaises(ConfigError):
            SSHConfig(host="win10", port=70000)

    def test_negative_timeouts_rejected(self):
        with self.assertRaises(ConfigError):
            SSHConfig(host="win10", connect_timeout=-1)

    def test_ssh_opts_cleaned_and_deduplicated(self):
        config = SSHConfig(host="win10", ssh_opts=["Compression=yes", " Compression=yes ", "", "LogLevel=\nERROR"])
        self.assertEqual(config.ssh_opts, ["Compression=yes", "LogLevel= ERROR"])

    def test_identity_expanded(self):
        config = SSHConfig(host="win10", identity="~/.ssh/id_ed25519")
        self.assertIsInstance(config.identity, Path)
        self.assertNotIn("~", str(config.identity))

    def test_ipv6_target_bracketed(self):
        self.assertEqual(SSHConfig(host="fe80::1", user="vagrant").target(), "vagrant@[fe80::1]")

    def test_base_cmd_basic(self):
        cmd = SSHConfig(host="win10", port=2222).base_cmd()

        self.assertEqual(cmd[0], "ssh")
        self.assertEqual(cmd[1:3], ["-p", "2222"])
        self.assertIn("BatchMode=yes", cmd)
        self.assertIn("StrictHostKeyChecking=no", cmd)
        self.assertIn("UserKnownHostsFile=/dev/null", cmd)
        self.assertEqual(cmd[-1], "Administrator@win10")

    def test_base_cmd_with_options(self):
        cmd = SSHConfig(
            host="win10",
            identity="/keys/win",
            jump_host="bastion",
            strict_host_key_checking=True,
            known_hosts_file="/tmp/kh",
            ssh_opts=["Compression=yes"],
        ).base_cmd()

        self.assertIn("StrictHostKeyChecking=yes", cmd)
        self.assertIn("UserKnownHostsFile=/tmp/kh", cmd)
        self.assertNotIn("UserKnownHostsFile=/dev/null", cmd)
        self.assertEqual(cmd[cmd.index("-i") + 1], "/keys/win")
        self.assertEqual(cmd[cmd.index("-J") + 1], "bastion")
        self.assertIn("Compression=yes", cmd)

    def test_describe(self):
        text = SSHConfig(host="win10", jump_host="bastion").describe()
        self.assertIn("Administrator@win10:22", text)
        self.assertIn("via=bastion", text)
        self.assertIn("hostkey=off", text)
