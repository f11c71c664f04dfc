"""Rich rendering for the command line and the REPL."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from itgl.core.inference import Inference
from itgl.core.syntax import Environment


class CliRenderer:
    def __init__(self, console: Console) -> None:
        self.console = console

    def welcome(self) -> None:
        self.console.print("[bold]ITGL[/bold] gradual type inference")
        self.console.print("[dim]Type :help for commands, :quit to exit[/dim]")

    def info(self, message: str) -> None:
        self.console.print(f"[dim]{escape(message)}[/dim]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)

    def inference(self, result: Inference, *, show_constraints: bool = False) -> None:
        if show_constraints:
            self.console.print(f"[cyan]raw[/cyan]: {escape(str(result.raw_type))}", soft_wrap=True)
            self.console.print(f"[cyan]constraints[/cyan]: {escape(str(result.constraints))}", soft_wrap=True)
            self.console.print(f"[cyan]substitution[/cyan]: {escape(str(result.substitution))}", soft_wrap=True)
        self.console.print(f"- : {escape(str(result.type))}", soft_wrap=True)

    def environment(self, env: Environment) -> None:
        if not len(env):
            self.info("Environment is empty")
            return
        for name in env:
            self.console.print(f"{escape(name)} : {escape(str(env.lookup(name)))}", soft_wrap=True)
