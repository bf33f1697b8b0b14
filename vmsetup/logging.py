"""Console logging for provisioning runs.

Informational and success lines go to stdout; warnings and errors go to
stderr. Every line carries a short tag ([INFO], [OK], [WARN], [ERROR]) so the
output stays readable when colors are stripped, e.g. when piped to a file.
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel


class ProvisionLogger:
    """Logger that writes tagged, colored lines for a human operator."""

    def __init__(self, console: Console = None, err_console: Console = None):
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def _emit(self, console: Console, tag: str, style: str, msg: str) -> None:
        label = escape(tag.ljust(7))
        console.print(f"[{style}]{label}[/{style}] {escape(msg)}")

    def info(self, msg: str) -> None:
        self._emit(self.console, "[INFO]", "bold yellow", msg)

    def success(self, msg: str) -> None:
        self._emit(self.console, "[OK]", "green", msg)

    def warn(self, msg: str) -> None:
        self._emit(self.err_console, "[WARN]", "yellow", msg)

    def error(self, msg: str) -> None:
        self._emit(self.err_console, "[ERROR]", "red", msg)

    def detail(self, msg: str) -> None:
        """Echo a line of child-process output."""
        self.console.print(f"[dim]        {escape(msg)}[/dim]")

    def progress(self, step: int, total: int, msg: str) -> None:
        self.console.print()
        self.console.print(f"[bold cyan]\\[{step}/{total}] {escape(msg)}[/bold cyan]")

    def banner(self, title: str, subtitle: str = "", style: str = "cyan") -> None:
        text = f"[bold]{escape(title)}[/bold]"
        if subtitle:
            text += f"\n{escape(subtitle)}"
        self.console.print(Panel(text, border_style=style, expand=False))

    def prompt(self, msg: str) -> str:
        """Ask the operator for a line of input."""
        return self.console.input(f"[bold yellow]{escape(msg)}[/bold yellow]")
