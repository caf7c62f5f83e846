"""Command-line wrapper around the plan engine."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional, Sequence, Tuple

import click

from . import engine, error_text
from .constants import (
    EXIT_INPUT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    PROJECT_NAME,
)
from .diagnostics import DiagnosticError, format_diagnostic
from .directives import build_directive_manifest
from .document import DocumentParseError, Node, parse_document
from .env_flags import is_verbose
from .generate import PlanGenerationError, generate_plan
from .plan import Plan, PlanParseError, marshal_plan, parse_plan
from .schema import SchemaValidationError, validate_instance

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(name)s %(levelname)s %(message)s"


class InputError(RuntimeError):
    """Raised when an input cannot be read or decoded."""


def _json_options(func):
    func = click.option(
        "--json-file",
        "json_file",
        type=click.Path(path_type=Path, dir_okay=False),
        help="Read the JSON document from a file",
    )(func)
    func = click.option("--json", "inline_json", type=str, help="JSON document (inline)")(func)
    return func


def _plan_options(func):
    func = click.option(
        "--schema-file",
        "schema_file",
        type=click.Path(path_type=Path, dir_okay=False),
        help="Validate the JSON document against this JSON Schema first",
    )(func)
    func = click.option(
        "--plan-file",
        "plan_file",
        type=click.Path(path_type=Path, dir_okay=False),
        help="Read the plan from a file",
    )(func)
    func = click.option(
        "--plan",
        "inline_plan",
        type=str,
        help="Plan JSON (inline); generated from the document when omitted",
    )(func)
    return func


_out_file_option = click.option(
    "--out-file",
    "out_file",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Write output to a file instead of stdout",
)


@click.group()
@click.option("--verbose", is_flag=True, help="Log diagnostics to stderr")
def cli(verbose: bool) -> None:
    """Convert JSON to Markdown using coverage-checked plans."""

    _configure_logging(verbose or is_verbose())


@cli.command()
@_json_options
@_out_file_option
def plan(inline_json: Optional[str], json_file: Optional[Path], out_file: Optional[Path]) -> None:
    """Generate a plan for a simple JSON document."""

    document = _load_document(inline_json, json_file)
    try:
        generated = generate_plan(document)
    except PlanGenerationError as exc:
        _fail(f"Error: {exc}", EXIT_VALIDATION_ERROR)
    _write_output(marshal_plan(generated), out_file)


@cli.command()
@_json_options
@_plan_options
@_out_file_option
def render(
    inline_json: Optional[str],
    json_file: Optional[Path],
    inline_plan: Optional[str],
    plan_file: Optional[Path],
    schema_file: Optional[Path],
    out_file: Optional[Path],
) -> None:
    """Render a JSON document as Markdown."""

    document, parsed_plan = _prepare(inline_json, json_file, inline_plan, plan_file, schema_file)
    try:
        markdown = engine.render(document, parsed_plan)
    except DiagnosticError as exc:
        _fail(format_diagnostic(exc), EXIT_VALIDATION_ERROR)
    _write_output(markdown, out_file)


@cli.command()
@_json_options
@_plan_options
def validate(
    inline_json: Optional[str],
    json_file: Optional[Path],
    inline_plan: Optional[str],
    plan_file: Optional[Path],
    schema_file: Optional[Path],
) -> None:
    """Check that a plan fully covers a JSON document without rendering it.

    Success prints nothing and exits 0; run with --verbose to log an OK line.
    """

    document, parsed_plan = _prepare(inline_json, json_file, inline_plan, plan_file, schema_file)
    try:
        engine.validate(document, parsed_plan)
    except DiagnosticError as exc:
        _fail(format_diagnostic(exc), EXIT_VALIDATION_ERROR)
    logger.info("OK: plan covers every leaf of the document")


@cli.command()
def directives() -> None:
    """Print the directive manifest as JSON."""

    click.echo(json.dumps(build_directive_manifest(), indent=2))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(argv if argv is not None else sys.argv[1:])
    try:
        with cli.make_context(PROJECT_NAME, args) as ctx:
            cli.invoke(ctx)
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    return EXIT_SUCCESS


def run() -> None:
    raise SystemExit(main())


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=_LOG_FORMAT, stream=sys.stderr)


def _prepare(
    inline_json: Optional[str],
    json_file: Optional[Path],
    inline_plan: Optional[str],
    plan_file: Optional[Path],
    schema_file: Optional[Path],
) -> Tuple[Node, Plan]:
    document = _load_document(inline_json, json_file)
    if schema_file is not None:
        schema = _load_schema(schema_file)
        try:
            validate_instance(document, schema)
        except SchemaValidationError as exc:
            _fail(f"Error: {exc}", EXIT_VALIDATION_ERROR)
        logger.debug("JSON instance validated against %s", schema_file)
    return document, _load_plan(document, inline_plan, plan_file)


def _load_document(inline_json: Optional[str], json_file: Optional[Path]) -> Node:
    if inline_json is not None and json_file is not None:
        raise click.UsageError(error_text.conflicting_inputs("json"))
    try:
        if inline_json is not None:
            data, source = inline_json.encode("utf-8"), "flag"
        elif json_file is not None:
            data, source = _read_file(json_file), str(json_file)
        else:
            data, source = click.get_binary_stream("stdin").read(), "stdin"
            if not data:
                raise InputError(error_text.missing_input("JSON"))
        logger.debug("JSON instance: %d bytes (from %s)", len(data), source)
        return parse_document(data)
    except DocumentParseError as exc:
        _fail(f"Error: {error_text.invalid_document(str(exc))}", EXIT_INPUT_ERROR)
    except InputError as exc:
        _fail(f"Error: {exc}", EXIT_INPUT_ERROR)


def _load_plan(document: Node, inline_plan: Optional[str], plan_file: Optional[Path]) -> Plan:
    if inline_plan is not None and plan_file is not None:
        raise click.UsageError(error_text.conflicting_inputs("plan"))
    if inline_plan is None and plan_file is None:
        try:
            generated = generate_plan(document)
        except PlanGenerationError as exc:
            _fail(f"Error: {exc}", EXIT_VALIDATION_ERROR)
        logger.debug("no plan supplied; generated %d directive(s)", len(generated.directives))
        return generated
    try:
        if inline_plan is not None:
            data: bytes = inline_plan.encode("utf-8")
        else:
            data = _read_file(plan_file)
        parsed = parse_plan(data)
    except PlanParseError as exc:
        _fail(f"Error: {error_text.invalid_plan(str(exc))}", EXIT_INPUT_ERROR)
    except InputError as exc:
        _fail(f"Error: {exc}", EXIT_INPUT_ERROR)
    logger.debug("plan: version=%d, %d directive(s)", parsed.version, len(parsed.directives))
    return parsed


def _load_schema(schema_file: Path) -> Any:
    try:
        return json.loads(_read_file(schema_file))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        _fail(f"Error: {error_text.invalid_schema(str(exc))}", EXIT_INPUT_ERROR)
    except InputError as exc:
        _fail(f"Error: {exc}", EXIT_INPUT_ERROR)


def _read_file(path: Path) -> bytes:
    if not path.exists():
        raise InputError(error_text.file_not_found(path))
    try:
        return path.read_bytes()
    except PermissionError:
        raise InputError(error_text.permission_denied(path)) from None
    except OSError as exc:
        raise InputError(error_text.read_failed(path, exc.strerror or str(exc))) from None


def _write_output(text: str, out_file: Optional[Path]) -> None:
    if out_file is None:
        click.echo(text)
        return
    try:
        out_file.write_text(text, encoding="utf-8")
    except OSError as exc:
        _fail(f"Error: {error_text.write_failed(out_file, exc.strerror or str(exc))}", EXIT_INPUT_ERROR)
    logger.debug("output written to %s", out_file)


def _fail(message: str, exit_code: int) -> NoReturn:
    click.echo(message, err=True)
    raise click.exceptions.Exit(exit_code)


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    run()
