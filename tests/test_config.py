"""Tests for du_cli.core.config."""
import json
import os
import tempfile
import unittest
from types import SimpleNamespace

from du_cli.core import config as config_module
from du_cli.core.errors import ConfigurationError, UsageError
from du_cli.core.models import LinkPolicy, Mode


def _args(**kw):
    base = dict(a=False, s=False, c=False, k=False, r=False, x=False, link_policy=None, files=[])
    base.update(kw)
    return SimpleNamespace(**base)


class TestConfigLoad(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "config.json")

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def _write(self, raw) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(raw if isinstance(raw, str) else json.dumps(raw))

    def test_load_returns_defaults_without_file(self) -> None:
        cfg = config_module.load([self.path])
        self.assertEqual(cfg, config_module.DEFAULTS)
        self.assertFalse(config_module.config_exists([self.path]))

    def test_load_has_expected_keys(self) -> None:
        cfg = config_module.load([self.path])
        for key in ("block_size", "grand_total", "one_file_system"):
            self.assertIn(key, cfg)

    def test_load_applies_valid_overrides(self) -> None:
        self._write({"block_size": 4096, "grand_total": True, "unknown": 1})
        cfg = config_module.load([self.path])
        self.assertTrue(config_module.config_exists([self.path]))
        self.assertEqual(cfg["block_size"], 4096)
        self.assertTrue(cfg["grand_total"])
        self.assertNotIn("unknown", cfg)

    def test_load_ignores_out_of_range_values(self) -> None:
        self._write({"block_size": 1000, "one_file_system": "yes"})
        cfg = config_module.load([self.path])
        self.assertEqual(cfg["block_size"], 1024)
        self.assertFalse(cfg["one_file_system"])

    def test_load_skips_malformed_file(self) -> None:
        self._write("{not json")
        self.assertEqual(config_module.load([self.path]), config_module.DEFAULTS)


class TestReportingBlockSize(unittest.TestCase):
    def test_default_is_1024(self) -> None:
        self.assertEqual(config_module.reporting_block_size({}), 1024)

    def test_posix_env_switches_to_512(self) -> None:
        self.assertEqual(config_module.reporting_block_size({"POSIXLY_CORRECT": ""}), 512)

    def test_k_always_wins(self) -> None:
        self.assertEqual(config_module.reporting_block_size({"POSIXLY_CORRECT": "1"}, True), 1024)
        self.assertEqual(config_module.reporting_block_size({}, True, {"block_size": 4096}), 1024)

    def test_config_default_then_env(self) -> None:
        self.assertEqual(config_module.reporting_block_size({}, False, {"block_size": 4096}), 4096)
        self.assertEqual(config_module.reporting_block_size({"POSIXLY_CORRECT": ""}, False, {"block_size": 4096}), 512)

    def test_bad_block_size_is_configuration_error(self) -> None:
        with self.assertRaises(ConfigurationError):
            config_module.reporting_block_size({}, False, {"block_size": 0})


class TestBuildOptions(unittest.TestCase):
    def test_defaults(self) -> None:
        opts = config_module.build_options(_args(), {})
        self.assertEqual(opts.paths, ["."])
        self.assertIs(opts.mode, Mode.DEFAULT)
        self.assertIs(opts.link_policy, LinkPolicy.PHYSICAL)
        self.assertEqual(opts.block_size, 1024)
        self.assertFalse(opts.grand_total)
        self.assertFalse(opts.one_file_system)

    def test_modes(self) -> None:
        self.assertIs(config_module.build_options(_args(a=True), {}).mode, Mode.ALL)
        self.assertIs(config_module.build_options(_args(s=True), {}).mode, Mode.SUMMARY)

    def test_all_and_summary_conflict(self) -> None:
        with self.assertRaises(UsageError):
            config_module.build_options(_args(a=True, s=True), {})

    def test_config_enables_grand_total_and_one_file_system(self) -> None:
        cfg = dict(config_module.DEFAULTS, grand_total=True, one_file_system=True)
        opts = config_module.build_options(_args(files=["x", "y"], link_policy=LinkPolicy.LOGICAL), {}, cfg)
        self.assertEqual(opts.paths, ["x", "y"])
        self.assertTrue(opts.grand_total)
        self.assertTrue(opts.one_file_system)
        self.assertIs(opts.link_policy, LinkPolicy.LOGICAL)
