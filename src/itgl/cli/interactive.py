"""Interactive REPL."""

from __future__ import annotations

from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory
from rich import get_console

from itgl.cli.render import CliRenderer
from itgl.config.settings import Settings
from itgl.core.errors import TypingError
from itgl.core.inference import infer_with_trace
from itgl.core.syntax import Environment
from itgl.surface.parser import ParseError, parse_binding, parse_expr
from itgl.surface.types import LexerError

COMMANDS = [":quit", ":q", ":help", ":h", ":env", ":assume", ":trace"]

HELP_TEXT = """\
Commands:
  :quit, :q              Exit the REPL
  :help, :h              Show this help
  :env                   Show the current environment
  :assume NAME : TYPE    Add NAME : TYPE to the environment
  :trace                 Toggle display of constraints and substitution

Anything else is an expression, e.g.
  fun x -> x
  fun (x : ?) -> x + 1
  (fun f -> f 1) (fun y -> y)"""


class InteractiveCli:
    """Read-infer-print loop over a persistent environment."""

    def __init__(self, settings: Settings, *, env: Environment | None = None) -> None:
        self.settings = settings
        self.env = env if env is not None else Environment.empty()
        self.show_constraints = settings.show_constraints
        self._renderer = CliRenderer(get_console())

    def run(self) -> None:
        prompt = self._build_prompt()
        self._renderer.welcome()
        while True:
            try:
                raw = prompt.prompt(self.settings.prompt)
            except KeyboardInterrupt:
                self._renderer.info("Interrupted. Use :quit to exit.")
                continue
            except EOFError:
                break

            if not self.handle_line(raw):
                break
        self._renderer.info("Bye.")

    def handle_line(self, line: str) -> bool:
        """Process one line of input. Returns False when the REPL should stop."""
        line = line.strip()
        if not line:
            return True
        if line.startswith(":"):
            return self._handle_command(line)
        self._infer(line)
        return True

    def _handle_command(self, line: str) -> bool:
        cmd, _, rest = line.partition(" ")
        match cmd:
            case ":quit" | ":q":
                return False
            case ":help" | ":h":
                self._renderer.console.print(HELP_TEXT, markup=False)
            case ":env":
                self._renderer.environment(self.env)
            case ":assume":
                self._assume(rest)
            case ":trace":
                self.show_constraints = not self.show_constraints
                self._renderer.info(f"trace {'on' if self.show_constraints else 'off'}")
            case _:
                self._renderer.error(f"Unknown command: {cmd}")
        return True

    def _assume(self, source: str) -> None:
        try:
            name, ty = parse_binding(source)
        except (LexerError, ParseError) as e:
            self._renderer.error(str(e))
            return
        self.env = self.env.extend(name, ty)
        self._renderer.console.print(f"{name} : {ty}", markup=False)

    def _infer(self, source: str) -> None:
        try:
            expr = parse_expr(source)
            result = infer_with_trace(self.env, expr)
        except (LexerError, ParseError, TypingError) as e:
            logger.debug("repl.error input={!r} error={}", source, e)
            self._renderer.error(str(e))
            return
        self._renderer.inference(result, show_constraints=self.show_constraints)

    def _build_prompt(self) -> PromptSession[str]:
        history_file = self.settings.history_file
        history_file.parent.mkdir(parents=True, exist_ok=True)
        completer = WordCompleter(COMMANDS, sentence=True)
        return PromptSession(history=FileHistory(str(history_file)), completer=completer)
