"""Typer CLI entrypoints."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console

from itgl.cli.interactive import InteractiveCli
from itgl.cli.render import CliRenderer
from itgl.config.settings import load_settings
from itgl.core.errors import TypingError
from itgl.core.inference import infer_with_trace
from itgl.core.syntax import Environment
from itgl.logging_utils import configure_logging
from itgl.surface.parser import ParseError, parse_binding, parse_expr, parse_program
from itgl.surface.types import LexerError

app = typer.Typer(name="itgl", help="Type inference for the implicitly typed gradual language", add_completion=False)

EnvOption = Annotated[
    list[str] | None,
    typer.Option("--env", "-e", help="Environment entry NAME:TYPE (repeatable), e.g. 'f:int -> ?'."),
]
ShowConstraintsOption = Annotated[
    bool | None,
    typer.Option("--show-constraints/--hide-constraints", help="Print constraints and substitution."),
]


def _parse_env(entries: list[str] | None) -> Environment:
    env = Environment.empty()
    for entry in entries or []:
        try:
            name, ty = parse_binding(entry)
        except (LexerError, ParseError) as e:
            raise typer.BadParameter(f"{entry!r}: {e}", param_hint="--env") from e
        env = env.extend(name, ty)
    return env


@app.callback(invoke_without_command=True)
def _default(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        repl()


@app.command()
def infer(
    expression: Annotated[str, typer.Argument(help="Expression to type, e.g. 'fun x -> x'.")],
    env: EnvOption = None,
    show_constraints: ShowConstraintsOption = None,
) -> None:
    """Infer the principal type of a single expression."""

    configure_logging()
    settings = load_settings(show_constraints=show_constraints)
    renderer = CliRenderer(Console())
    environment = _parse_env(env)
    logger.info("infer.start expression={!r} env={}", expression, len(environment))
    try:
        result = infer_with_trace(environment, parse_expr(expression))
    except (LexerError, ParseError, TypingError) as e:
        renderer.error(str(e))
        raise typer.Exit(code=1) from e
    renderer.inference(result, show_constraints=settings.show_constraints)


@app.command()
def check(
    file: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True)],
    env: EnvOption = None,
    show_constraints: ShowConstraintsOption = None,
) -> None:
    """Infer every ';;'-separated expression in FILE."""

    configure_logging()
    settings = load_settings(show_constraints=show_constraints)
    renderer = CliRenderer(Console())
    environment = _parse_env(env)
    logger.info("check.start file={}", str(file))
    try:
        exprs = parse_program(file.read_text(encoding="utf-8"), filename=str(file))
    except (LexerError, ParseError) as e:
        renderer.error(str(e))
        raise typer.Exit(code=1) from e

    failures = 0
    for expr in exprs:
        try:
            result = infer_with_trace(environment, expr)
        except TypingError as e:
            failures += 1
            renderer.error(f"{expr}: {e}")
            continue
        renderer.inference(result, show_constraints=settings.show_constraints)

    logger.info("check.done file={} expressions={} failures={}", str(file), len(exprs), failures)
    if failures:
        raise typer.Exit(code=1)


@app.command()
def repl(
    env: EnvOption = None,
    home: Annotated[Path | None, typer.Option("--home", help="Directory for REPL history.")] = None,
) -> None:
    """Run the interactive REPL."""

    configure_logging(profile="repl")
    settings = load_settings(home=str(home) if home is not None else None)
    InteractiveCli(settings, env=_parse_env(env)).run()


def main() -> None:
    app()
