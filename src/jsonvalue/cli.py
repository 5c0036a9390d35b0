from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

import typer

from jsonvalue.config import resolve_parser_limits
from jsonvalue.runtime import env_policy
from jsonvalue.runtime.json_io import dump_value_path, load_value_path, load_values_path
from jsonvalue.value import Value

app = typer.Typer(add_completion=False, help="Parse and serialize JSON values.")

_DEFAULT_BENCH_ITERATIONS = 100_000


def _echo_text(line: str, *, err: bool = False) -> None:
    # Lone surrogates from \u escapes are not encodable as strict UTF-8.
    typer.echo(line.encode("utf-8", "surrogatepass"), err=err)


def _resolve_max_depth(max_depth: Optional[int], config: Optional[Path]) -> int:
    if max_depth is not None:
        return max_depth
    return resolve_parser_limits(config_path=config).max_depth


@app.callback()
def main(
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Log parser diagnostics to stderr.",
    ),
) -> None:
    if debug or env_policy.env_flag(env_policy.DEBUG_ENV):
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _read_single(path: Optional[Path], *, depth: int, output: Optional[Path]) -> None:
    outcome = load_value_path(path, max_depth=depth, stdin=typer.get_binary_stream("stdin"))
    if outcome.failed:
        _echo_text(f"Failed: {outcome.error}")
        raise typer.Exit(code=1)
    _echo_text(f"Result: {outcome.value.to_text()}")
    if output is not None:
        dump_value_path(output, outcome.value)


def _read_multi(path: Optional[Path], *, depth: int, output: Optional[Path]) -> None:
    outcome = load_values_path(path, max_depth=depth, stdin=typer.get_binary_stream("stdin"))
    # The failing document contributes a trailing Null placeholder.
    parsed = outcome.values[:-1] if outcome.failed else outcome.values
    for value in parsed:
        _echo_text(f"Result: {value.to_text()}")
    if outcome.failed:
        _echo_text(f"Failed: {outcome.error}")
        raise typer.Exit(code=1)
    if output is not None:
        dump_value_path(output, Value.array(parsed))


@app.command("parse")
def parse_command(
    path: Optional[Path] = typer.Argument(
        None, help="Document to parse; reads stdin when omitted or '-'."
    ),
    multi: bool = typer.Option(
        False, "--multi/--single", help="Parse a stream of concatenated documents."
    ),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", min=1, help="Maximum container nesting depth."
    ),
    config: Optional[Path] = typer.Option(None, "--config"),
    output: Optional[Path] = typer.Option(
        None, "--output", help="Also write the serialized value to this file."
    ),
) -> None:
    """Parse a document and print its canonical form or the parse error."""
    depth = _resolve_max_depth(max_depth, config)
    reader = _read_multi if multi else _read_single
    try:
        reader(path, depth=depth, output=output)
    except OSError as exc:
        raise typer.BadParameter(f"cannot read {path}: {exc}") from exc


def build_bench_values(iterations: int) -> list[Value]:
    return [
        Value.object({"id": index, "value": str(index)})
        for index in range(iterations)
    ]


def bench_total(values: list[Value]) -> int:
    total = 0
    for value in values:
        total += len(value.to_text())
        total += len(value["value"].string_value())
    return total


@app.command("bench")
def bench_command(
    iterations: int = typer.Option(
        _DEFAULT_BENCH_ITERATIONS, "--iterations", "-n", min=1
    ),
) -> None:
    """Build and serialize a batch of small objects and report throughput."""
    started = time.perf_counter()
    values = build_bench_values(iterations)
    built = time.perf_counter()
    total = bench_total(values)
    finished = time.perf_counter()
    typer.echo(f"total: {total}")
    typer.echo(
        f"build: {built - started:.3f}s serialize: {finished - built:.3f}s "
        f"({iterations} values)"
    )


if __name__ == "__main__":  # pragma: no cover
    app()
