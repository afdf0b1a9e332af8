"""Tests for the preprocessor stdin/stdout protocol."""

from __future__ import annotations

import json
from typing import Any

from click.testing import CliRunner

from mdbook_obsidian.cli import cli
from tests.conftest import chapter, make_book, make_context, make_input


class TestPreprocessCommand:
    def test_bare_invocation_rewrites_book(
        self, cli_runner: CliRunner, sample_book: dict[str, Any]
    ) -> None:
        result = cli_runner.invoke(cli, [], input=make_input(sample_book))
        assert result.exit_code == 0
        book = json.loads(result.stdout)
        intro = book["sections"][1]["Chapter"]
        assert intro["content"] == (
            "# Intro\n\nSee [advanced](advanced.md) and [api](api.md#methods).\n"
        )
        assert book["sections"][2] == "Separator"
        assert result.stderr == ""

    def test_explicit_subcommand(self, cli_runner: CliRunner) -> None:
        raw = make_input(make_book(chapter("a", "[[a]] and [[b|B]]")))
        result = cli_runner.invoke(cli, ["preprocess"], input=raw)
        assert result.exit_code == 0
        book = json.loads(result.stdout)
        assert book["sections"][0]["Chapter"]["content"] == "[a](a.md) and [B](b.md)"

    def test_stdout_is_only_the_book(self, cli_runner: CliRunner) -> None:
        book = make_book(chapter("a", "plain"))
        result = cli_runner.invoke(cli, ["-v"], input=make_input(book))
        assert result.exit_code == 0
        assert json.loads(result.stdout) == book

    def test_non_ascii_content(self, cli_runner: CliRunner) -> None:
        raw = make_input(make_book(chapter("a", "Siehe [[Übersicht#Größe Ändern|Größe]]")))
        result = cli_runner.invoke(cli, [], input=raw)
        book = json.loads(result.stdout)
        assert book["sections"][0]["Chapter"]["content"] == (
            "Siehe [Größe](Übersicht.md#größe-ändern)"
        )

    def test_reads_utf8_regardless_of_stdin_encoding(self) -> None:
        runner = CliRunner(charset="latin-1")
        book = make_book(chapter("a", "Siehe [[Übersicht#Größe|Größe]]"))
        raw = json.dumps([make_context(), book], ensure_ascii=False).encode("utf-8")
        result = runner.invoke(cli, [], input=raw)
        assert result.exit_code == 0
        assert result.stdout.isascii()
        out = json.loads(result.stdout)
        assert out["sections"][0]["Chapter"]["content"] == "Siehe [Größe](Übersicht.md#größe)"

    def test_malformed_input(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [], input="{oops")
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "ERROR" in result.stderr
        assert "not valid JSON" in result.stderr

    def test_empty_input(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [], input="")
        assert result.exit_code == 1
        assert result.stdout == ""

    def test_unsupported_renderer_passthrough(self, cli_runner: CliRunner) -> None:
        book = make_book(chapter("a", "[[b]]"))
        result = cli_runner.invoke(cli, [], input=make_input(book, renderer="not-supported"))
        assert result.exit_code == 0
        assert json.loads(result.stdout) == book
        assert "Renderer not supported" in result.stderr

    def test_link_extension_from_book_config(self, cli_runner: CliRunner) -> None:
        book = make_book(chapter("a", "[[b#Part One]]"))
        raw = make_input(book, preprocessor={"obsidian": {"link_extension": ".html"}})
        result = cli_runner.invoke(cli, [], input=raw)
        content = json.loads(result.stdout)["sections"][0]["Chapter"]["content"]
        assert content == "[b](b.html#part-one)"

    def test_verbose_summary_on_stderr(self, cli_runner: CliRunner) -> None:
        raw = make_input(make_book(chapter("a", "[[b]]")))
        result = cli_runner.invoke(cli, ["-v", "preprocess"], input=raw)
        assert result.exit_code == 0
        assert "links: 1" in result.stderr
        assert "telemetry" in result.stderr
        json.loads(result.stdout)
