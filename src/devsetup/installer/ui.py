"""
devsetup Installer UI Components

Tagged status lines, prompts and the final report, using the rich library.
Every status line is mirrored to the log so the log file is a full transcript.
"""

from typing import Optional, List, Callable, Any
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Prompt
from rich.table import Table

from devsetup.installer.policy import OperatorResponse
from devsetup.installer.logging_config import get_logger
from devsetup.installer.report import RunReport, StepStatus


logger = get_logger("ui")


class InstallerUI:
    """UI components for the devsetup installer."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self._step_number = 0
        self._total_steps = 0

    def print_header(self, title: str = "Ubuntu Development Setup"):
        """Print the installer header."""
        self.console.print()
        self.console.print(Panel(
            f"[bold blue]{title}[/bold blue]",
            border_style="blue",
            padding=(0, 2)
        ))
        self.console.print()

    def print_step_header(self, step_num: int, title: str, total_steps: Optional[int] = None):
        """Print a step header with number and title."""
        self._step_number = step_num
        if total_steps is not None:
            self._total_steps = total_steps
        self.console.print()
        self.console.print(f"[bold cyan]Step {step_num}/{self._total_steps}:[/bold cyan] [bold]{escape(title)}[/bold]")

    def _status(self, tag: str, color: str, message: str, level: str):
        self.console.print(f"[{color}]\\[{tag}][/{color}] {escape(message)}")
        getattr(logger, level)("[%s] %s", tag, message)

    def print_info(self, message: str):
        self._status("INFO", "blue", message, "info")

    def print_success(self, message: str):
        self._status("SUCCESS", "green", message, "info")

    def print_warning(self, message: str):
        self._status("WARNING", "yellow", message, "warning")

    def print_error(self, message: str):
        self._status("ERROR", "red", message, "error")

    def ask(self, prompt: str) -> str:
        """Read one line of operator input. End of input reads as an empty answer."""
        try:
            return Prompt.ask(prompt, default="", show_default=False, console=self.console)
        except EOFError:
            self.console.print()
            logger.debug("End of input at prompt %r", prompt)
            return ""

    def prompt_yes_no(self, question: str, default: bool = True) -> bool:
        """Ask a yes/no question; anything but y/yes/n/no means the default."""
        suffix = "[Y/n]" if default else "[y/N]"
        raw = self.ask(f"{escape(question)} {escape(suffix)}")
        response = OperatorResponse.parse(raw)
        accepted = response.resolve(default)
        logger.debug("Prompt %r -> %r (%s)", question, raw, "yes" if accepted else "no")
        return accepted

    def show_progress(
        self,
        description: str,
        task_func: Callable[[], Any],
    ) -> Any:
        """Show a progress spinner while executing a task."""
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=self.console
        ) as progress:
            progress.add_task(description, total=None)
            return task_func()

    def show_report(self, report: RunReport, title: str = "Setup Summary"):
        """Render the run report as a table."""
        table = Table(title=title, border_style="blue")
        table.add_column("Step", style="cyan")
        table.add_column("Status")
        table.add_column("Details", style="dim")
        table.add_column("Time", justify="right", style="dim")

        status_styles = {
            StepStatus.SUCCESS: "[green]✓ success[/green]",
            StepStatus.SKIPPED: "[dim]○ skipped[/dim]",
            StepStatus.FAILED: "[red]✗ failed[/red]",
        }

        for outcome in report.outcomes:
            duration = f"{outcome.duration:.1f}s" if outcome.duration else ""
            table.add_row(
                outcome.title,
                status_styles[outcome.status],
                escape(outcome.reason.splitlines()[0]) if outcome.reason else "",
                duration,
            )

        self.console.print()
        self.console.print(table)

    def show_completion_panel(
        self,
        title: str,
        content: str,
        notes: List[str],
        style: str = "green"
    ):
        """Show a completion panel with follow-up notes."""
        self.console.print()
        self.console.print(Panel(
            f"[bold {style}]{title}[/bold {style}]\n\n{content}",
            border_style=style,
            padding=(1, 2)
        ))

        if notes:
            self.console.print()
            for note in notes:
                self.console.print(f"[yellow]Note:[/yellow] {note}")
