"""Tests for TOML config file loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from arith.cli import DEFAULT_PROMPT, build_parser, load_config, main, resolve_options


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("[variables]\nr = 2\n")
        result = load_config(cfg, tmp_path)
        assert result["variables"] == {"r": 2}

    def test_auto_discover_arith_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "arith.toml"
        cfg.write_text('[repl]\nprompt = ">> "\n')
        result = load_config(None, tmp_path)
        assert result["repl"] == {"prompt": ">> "}


class TestConfigMerge:
    def _options(self, tmp_path: Path, config: str, *extra: str):
        (tmp_path / "arith.toml").write_text(config)
        src = tmp_path / "calc.txt"
        src.write_text("")
        ns = build_parser().parse_args([str(src), *extra])
        return resolve_options(ns)

    def test_config_variables(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path, "[variables]\npi = 3.5\nn = 2\n")
        assert opts.variables == {"pi": 3.5, "n": 2.0}

    def test_cli_overrides_config_variables(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path, "[variables]\nn = 2\nm = 1\n", "-e", "n=5")
        assert opts.variables == {"n": 5.0, "m": 1.0}

    def test_non_numeric_variable_ignored(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="arith.cli"):
            opts = self._options(tmp_path, '[variables]\nname = "x"\nflag = true\nok = 1\n')
        assert opts.variables == {"ok": 1.0}
        assert "name" in caplog.text
        assert "flag" in caplog.text

    def test_prompt(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path, '[repl]\nprompt = "calc> "\n')
        assert opts.prompt == "calc> "

    def test_default_prompt(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path, "")
        assert opts.prompt == DEFAULT_PROMPT


class TestConfigEndToEnd:
    def test_variables_reach_evaluation(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "arith.toml").write_text("[variables]\nr = 3\n")
        assert main(["-c", "r * r"]) == 0
        assert capsys.readouterr().out == "9\n"

    def test_explicit_config_flag(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.chdir(tmp_path)
        cfg = tmp_path / "other.toml"
        cfg.write_text("[variables]\nr = 4\n")
        assert main(["--config", str(cfg), "-c", "r + 1"]) == 0
        assert capsys.readouterr().out == "5\n"

    def test_invalid_toml_exits_2(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "arith.toml").write_text("[variables\n")
        assert main(["-c", "1"]) == 2
        assert "invalid config" in capsys.readouterr().err
