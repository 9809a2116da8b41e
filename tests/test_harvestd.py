"""Tests for harvestd configuration and plugin loading."""

from irq_metrics import harvestd
from irq_metrics.collectors import interrupts, softirqs
from irq_metrics.utils import load_conf, merge_conf


class FakeEntryPoint:
    def __init__(self, name, module):
        self.name, self.module = name, module

    def load(self):
        return self.module


class FailingEntryPoint(FakeEntryPoint):
    def load(self):
        raise ImportError("no such module")


class TestMergeConf:
    """Tests for layered configuration merging."""

    def test_nested_merge(self):
        """Test nested dicts are merged without touching the base."""
        base = dict(a=dict(b=1, c=2), d=3)
        assert merge_conf(base, dict(a=dict(c=5), e=6)) == dict(
            a=dict(b=1, c=5), d=3, e=6
        )
        assert base == dict(a=dict(b=1, c=2), d=3)

    def test_none_update(self):
        """Test empty override leaves base values."""
        assert merge_conf(dict(a=1), None) == dict(a=1)

    def test_load_conf_later_files_win(self, tmp_path):
        """Test later YAML files override earlier ones."""
        first, second = tmp_path / "a.yaml", tmp_path / "b.yaml"
        first.write_text("loop:\n  interval: 10\n  name: basic\n")
        second.write_text("loop:\n  interval: 30\n")
        assert load_conf(str(first), str(second)) == dict(
            loop=dict(interval=30, name="basic")
        )


class TestBuildConf:
    """Tests for CLI and config file handling."""

    def test_defaults(self):
        """Test shipped defaults with no CLI options."""
        cfg = harvestd.build_conf(harvestd.parse_args([]), environ={})
        assert cfg["loop"]["interval"] == 60
        assert cfg["sinks"]["carbon_socket"]["host"] == ("localhost", 2003)
        assert cfg["collectors"]["interrupts"]["per_core"] is True
        assert cfg["collectors"]["interrupts"]["host_prefix"] == ""
        assert cfg["sinks"]["dump"]["enabled"] is False

    def test_cli_overrides(self, tmp_path):
        """Test CLI options override config file values."""
        conf = tmp_path / "local.yaml"
        conf.write_text("collectors:\n  interrupts:\n    per_core: false\n")
        optz = harvestd.parse_args(
            [
                "-c", str(conf),
                "-t", "carbon:2004",
                "-i", "15",
                "-n",
                "-d", "softirqs",
                "--host-prefix", "/host",
            ]
        )
        cfg = harvestd.build_conf(optz, environ={})
        assert cfg["loop"]["interval"] == 15
        assert cfg["debug"]["dry_run"] is True
        assert cfg["sinks"]["carbon_socket"]["host"] == ("carbon", 2004)
        assert cfg["collectors"]["interrupts"]["per_core"] is False
        assert cfg["collectors"]["interrupts"]["host_prefix"] == "/host"
        assert cfg["collectors"]["softirqs"]["enabled"] is False

    def test_host_prefix_from_env(self):
        """Test host prefix is taken from environment."""
        cfg = harvestd.build_conf(
            harvestd.parse_args([]), environ={harvestd.host_prefix_env: "/rootfs"}
        )
        assert cfg["collectors"]["softirqs"]["host_prefix"] == "/rootfs"


class TestLoadPlugins:
    """Tests for entry point based plugin initialization."""

    def test_enabled_collectors(self):
        """Test only enabled and non-underscore plugins are loaded."""
        cfg = harvestd.build_conf(harvestd.parse_args(["-e", "interrupts"]), environ={})
        objects = harvestd.load_plugins(
            "collector",
            cfg["collectors"],
            entry_points=[
                FakeEntryPoint("interrupts", interrupts),
                FakeEntryPoint("softirqs", softirqs),
                FakeEntryPoint("_hidden", interrupts),
            ],
        )
        assert list(objects) == ["interrupts"]
        assert isinstance(objects["interrupts"], interrupts.Interrupts)
        assert objects["interrupts"].per_core is True

    def test_failing_plugin_skipped(self):
        """Test plugins failing to load are skipped."""
        cfg = harvestd.build_conf(harvestd.parse_args([]), environ={})
        objects = harvestd.load_plugins(
            "collector",
            cfg["collectors"],
            entry_points=[
                FailingEntryPoint("broken", None),
                FakeEntryPoint("softirqs", softirqs),
            ],
        )
        assert list(objects) == ["softirqs"]
