"""Tests for the command-line entry point."""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import patch

import pytest

from recast.__main__ import main
from recast.config import AppConfig
from recast.presets import PresetStore
from recast.transform.normalizer import TransformResult


@pytest.fixture
def paths(tmp_path: Path) -> list[str]:
    return ["--config", str(tmp_path / "config.toml"), "--presets", str(tmp_path / "presets.toml")]


class TestCli:
    def test_modes_lists_catalog(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["modes"]) == 0
        out = capsys.readouterr().out
        assert "summarize" in out
        assert "markdown" in out
        assert "json " in out

    def test_models_for_one_provider(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["models", "gemini"]) == 0
        out = capsys.readouterr().out
        assert "gemini-2.0-flash" in out
        assert "gpt-4o" not in out

    def test_presets_add_and_list(
        self, paths: list[str], tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([*paths, "presets", "add", "--name", "notes", "--provider", "openai"]) == 0
        assert main([*paths, "presets", "list"]) == 0

        out = capsys.readouterr().out
        assert "notes" in out
        assert "openai/gpt-4o" in out

        store = PresetStore(tmp_path / "presets.toml")
        store.load()
        assert store.presets[0].name == "notes"

    def test_presets_delete_unknown(self, paths: list[str], capsys: pytest.CaptureFixture[str]) -> None:
        assert main([*paths, "presets", "delete", "nope"]) == 1
        assert "preset not found" in capsys.readouterr().err

    def test_keys_set_and_show_masked(
        self, paths: list[str], tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([*paths, "keys", "set", "anthropic", "sk-ant-0123456789"]) == 0
        assert main([*paths, "keys", "show"]) == 0

        out = capsys.readouterr().out
        assert "sk-ant-0123456789" not in out
        assert "6789" in out
        assert AppConfig.load(tmp_path / "config.toml").keys.anthropic == "sk-ant-0123456789"

    def test_convert_without_input(
        self, paths: list[str], monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("   \n"))
        assert main([*paths, "convert", "-p", "any"]) == 1
        assert capsys.readouterr().err.strip() == "ERROR: missing input text"

    def test_convert_unknown_preset(
        self, paths: list[str], monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("some text"))
        assert main([*paths, "convert", "-p", "missing"]) == 1
        assert capsys.readouterr().err.strip() == "ERROR: no preset selected"

    def test_convert_prints_result(
        self, paths: list[str], tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main([*paths, "presets", "add", "--name", "sum", "--mode", "summarize"])
        input_file = tmp_path / "input.txt"
        input_file.write_text("long paragraph\n", encoding="utf-8")
        capsys.readouterr()

        with patch(
            "recast.converter.Converter.convert", return_value=TransformResult.success("要約結果")
        ) as convert:
            code = main([*paths, "convert", "-p", "sum", "-f", str(input_file)])

        assert code == 0
        assert capsys.readouterr().out == "要約結果\n"
        preset, text = convert.call_args.args
        assert preset.name == "sum"
        assert text == "long paragraph"

    def test_convert_failure_goes_to_stderr(
        self, paths: list[str], monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main([*paths, "presets", "add", "--name", "sum"])
        monkeypatch.setattr("sys.stdin", io.StringIO("text"))
        capsys.readouterr()

        # No key in config or environment
        assert main([*paths, "convert", "-p", "sum"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "ERROR: API key not set — anthropic" in captured.err

    def test_convert_with_string_timeout_in_config(
        self, paths: list[str], tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "config.toml").write_text('[http]\ntimeout = "30"\n')
        main([*paths, "presets", "add", "--name", "sum"])
        monkeypatch.setattr("sys.stdin", io.StringIO("text"))

        with patch("recast.converter.Converter") as converter:
            converter.return_value.convert.return_value = TransformResult.success("ok")
            assert main([*paths, "convert", "-p", "sum"]) == 0

        assert converter.call_args.kwargs["timeout"] == 30.0
