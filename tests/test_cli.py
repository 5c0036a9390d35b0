from __future__ import annotations

from pathlib import Path
import sys

from typer.testing import CliRunner

from jsonvalue import cli


def test_parse_stdin_prints_canonical_value() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["parse"], input='{"k2": 42, "k1": ["a", true]}')
    assert result.exit_code == 0
    assert result.output.strip() == 'Result: {"k1": ["a", true], "k2": 42}'


def test_parse_stdin_failure_exits_nonzero() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["parse", "-"], input="[1,")
    assert result.exit_code == 1
    assert "Failed: unexpected end of input" in result.output


def test_parse_file_and_output(tmp_path: Path) -> None:
    source = tmp_path / "in.json"
    source.write_text("[1, 2.5]", encoding="utf-8")
    target = tmp_path / "out" / "copy.json"
    runner = CliRunner()
    result = runner.invoke(cli.app, ["parse", str(source), "--output", str(target)])
    assert result.exit_code == 0
    assert "Result: [1, 2.5]" in result.output
    assert target.read_text(encoding="utf-8") == "[1, 2.5]\n"


def test_parse_missing_file_is_usage_error(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["parse", str(tmp_path / "absent.json")])
    assert result.exit_code == 2
    assert "cannot read" in " ".join(result.output.split())


def test_parse_multi_prints_each_value(tmp_path: Path) -> None:
    runner = CliRunner()
    target = tmp_path / "all.json"
    result = runner.invoke(
        cli.app,
        ["parse", "--multi", "--output", str(target)],
        input='1 "two"\n[3]',
    )
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "Result: 1",
        'Result: "two"',
        "Result: [3]",
    ]
    assert target.read_text(encoding="utf-8") == '[1, "two", [3]]\n'


def test_parse_multi_failure_keeps_earlier_results() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["parse", "--multi"], input="1 x")
    assert result.exit_code == 1
    assert result.output.splitlines() == [
        "Result: 1",
        "Failed: expected value, got 'x' (120)",
    ]


def test_parse_max_depth_option() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["parse", "--max-depth", "1"], input="[[1]]")
    assert result.exit_code == 1
    assert "Failed: exceeded maximum nesting depth" in result.output
    rejected = runner.invoke(cli.app, ["parse", "--max-depth", "0"], input="1")
    assert rejected.exit_code == 2


def test_parse_max_depth_from_config_and_environment(tmp_path: Path) -> None:
    config_path = tmp_path / "jsonvalue.toml"
    config_path.write_text("[parser]\nmax_depth = 1\n", encoding="utf-8")
    runner = CliRunner()
    from_file = runner.invoke(
        cli.app, ["parse", "--config", str(config_path)], input="[[1]]"
    )
    assert from_file.exit_code == 1
    from_env = runner.invoke(
        cli.app, ["parse"], input="[[1]]", env={"JSONVALUE_MAX_DEPTH": "1"}
    )
    assert from_env.exit_code == 1
    explicit = runner.invoke(
        cli.app,
        ["parse", "--config", str(config_path), "--max-depth", "2"],
        input="[[1]]",
    )
    assert explicit.exit_code == 0
    assert "Result: [[1]]" in explicit.output


def test_debug_flag_is_accepted() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["--debug", "parse"], input="null")
    assert result.exit_code == 0
    assert "Result: null" in result.output


def test_bench_reports_total() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["bench", "-n", "10"])
    assert result.exit_code == 0
    assert result.output.splitlines()[0] == "total: 240"


def test_bench_helpers() -> None:
    values = cli.build_bench_values(3)
    assert values[2].to_text() == '{"id": 2, "value": "2"}'
    assert cli.bench_total(values) == 72


def test_parse_invalid_utf8_file_reports_failure(tmp_path: Path) -> None:
    source = tmp_path / "bad.json"
    source.write_bytes(b'"\xff"')
    runner = CliRunner()
    result = runner.invoke(cli.app, ["parse", str(source)])
    assert result.exit_code == 1
    assert "Failed: invalid UTF-8 in input at byte 1" in result.output
    multi = runner.invoke(cli.app, ["parse", "--multi", "-"], input=b"1 \xc3")
    assert multi.exit_code == 1
    assert "Failed: invalid UTF-8 in input at byte 2" in multi.output


def test_parse_large_max_depth_reports_nesting_failure() -> None:
    depth = sys.getrecursionlimit()
    runner = CliRunner()
    result = runner.invoke(
        cli.app,
        ["parse", "--max-depth", str(depth * 2)],
        input="[" * depth + "]" * depth,
    )
    assert result.exit_code == 1
    assert "Failed: exceeded maximum nesting depth" in result.output
