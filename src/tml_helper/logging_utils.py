# src/tml_helper/logging_utils.py

import logging
from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Route library logging through rich. DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


class HelperLogger:
    """Timestamped console output for tml-helper commands."""

    def __init__(self, out: Optional[Console] = None):
        self.console = out or console

    def _get_timestamp(self) -> str:
        """Returns formatted timestamp."""
        return datetime.now().strftime("%H:%M:%S")

    def _line(self, label: str, label_style: str, message: str, message_style: str = "") -> Text:
        text = Text()
        text.append(f"{self._get_timestamp()} ", style="dim")
        if label:
            text.append(f"{label} ", style=label_style)
        text.append(message, style=message_style)
        return text

    def info(self, message: str, prefix: str = ""):
        """Logs an info message."""
        self.console.print(self._line(prefix, "cyan", message))

    def success(self, message: str, detail: Optional[str] = None):
        """Logs a success message (green), with an optional dim detail line."""
        self.console.print(self._line("OK", "bold green", message))
        if detail:
            self.console.print(Text(f"         {detail}", style="dim"))

    def warning(self, message: str):
        """Logs a warning (yellow)."""
        self.console.print(self._line("WARN", "bold yellow", message, "yellow"))

    def error(self, message: str):
        """Logs an error (red)."""
        self.console.print(self._line("ERROR", "bold red", message, "red"))

