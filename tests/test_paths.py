"""Tests for vploop.paths."""

import os

import pytest

from vploop.paths import resolve_config, resolve_log
import vploop.paths as paths_mod


class TestResolveConfig:
    """Tests for resolve_config()."""

    def test_finds_local_file(self, tmp_path, monkeypatch):
        """Bare filename found in current directory is returned."""
        cfg = tmp_path / "vploop.toml"
        cfg.write_text("")
        monkeypatch.chdir(tmp_path)

        assert resolve_config("vploop.toml") == str(cfg)

    def test_falls_back_to_etc(self, tmp_path, monkeypatch):
        """Bare filename not in cwd falls back to ETC_DIR."""
        etc = tmp_path / "etc_vploop"
        etc.mkdir()
        (etc / "vploop.toml").write_text("")
        monkeypatch.setattr(paths_mod, "ETC_DIR", str(etc))
        monkeypatch.chdir(tmp_path)

        assert resolve_config("vploop.toml") == str(etc / "vploop.toml")

    def test_raises_when_not_found(self, tmp_path, monkeypatch):
        """FileNotFoundError raised when config is nowhere."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(paths_mod, "ETC_DIR", str(tmp_path / "no_etc"))

        with pytest.raises(FileNotFoundError, match="vploop.toml"):
            resolve_config("vploop.toml")

    def test_explicit_path_exists(self, tmp_path):
        """Path containing '/' is returned absolute."""
        cfg = tmp_path / "sub" / "vploop.toml"
        cfg.parent.mkdir()
        cfg.write_text("")

        result = resolve_config(str(cfg))

        assert result == str(cfg)
        assert os.path.isabs(result)

    def test_explicit_path_not_found(self, tmp_path):
        """Explicit path that does not exist raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            resolve_config(str(tmp_path / "missing.toml"))

    def test_relative_explicit_path(self, tmp_path, monkeypatch):
        """A relative path with a directory part is resolved from cwd only."""
        (tmp_path / "conf").mkdir()
        (tmp_path / "conf" / "vploop.toml").write_text("")
        monkeypatch.chdir(tmp_path)

        assert resolve_config("conf/vploop.toml") == str(tmp_path / "conf" / "vploop.toml")


class TestResolveLog:
    """Tests for resolve_log()."""

    def test_dev_config(self, tmp_path):
        """Config outside ETC_DIR puts the log in logs/ beside it."""
        config_path = str(tmp_path / "vploop.toml")
        assert resolve_log(config_path, "wx.log") == str(tmp_path / "logs" / "wx.log")

    def test_production_config(self):
        """Config under /etc/vploop puts the log in /var/log/vploop."""
        assert resolve_log("/etc/vploop/vploop.toml", "wx.log") == "/var/log/vploop/wx.log"

    def test_no_config(self, tmp_path, monkeypatch):
        """Without a config file the log goes in ./logs."""
        monkeypatch.chdir(tmp_path)
        assert resolve_log(None, "wx.log") == str(tmp_path / "logs" / "wx.log")

    def test_explicit_log_path(self, tmp_path):
        """A log name with a '/' is used as given."""
        path = str(tmp_path / "elsewhere" / "wx.log")
        assert resolve_log("/etc/vploop/vploop.toml", path) == path
