"""
devsetup Command Line Interface

Main entry point for the devsetup CLI.
"""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

console = Console()

POST_INSTALL_NOTES = [
    "You may need to logout and login again for some changes to take effect.",
    "Run 'source ~/.bashrc' or 'source ~/.zshrc' to reload your shell configuration.",
]


def build_orchestrator(ctx):
    """Create an orchestrator holding the full step catalogue."""
    from devsetup.installer import InstallerOrchestrator
    from devsetup.installer.steps import INSTALL_STEPS

    orchestrator = InstallerOrchestrator(ctx)
    for step in INSTALL_STEPS:
        orchestrator.add_step(
            name=step["name"],
            title=step["title"],
            action=step["action"],
            prompt=step.get("prompt"),
            default=step.get("default", True),
            predicate=step.get("predicate"),
            fatal=step.get("fatal", False),
        )
    return orchestrator


def _load_config_or_exit(config_path):
    from devsetup.config import load_config
    from devsetup.installer.exceptions import ConfigError, get_error_code

    try:
        return load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(get_error_code(e))


@click.group()
@click.version_option(package_name="devsetup")
def main():
    """devsetup: Ubuntu development workstation provisioning"""
    pass


@main.command()
@click.option("--yes", "-y", is_flag=True, help="Run unattended, accepting every step not declined")
@click.option("--accept", multiple=True, metavar="STEP", help="Accept a step (implies unattended)")
@click.option("--decline", multiple=True, metavar="STEP", help="Decline a step (implies unattended)")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Config file (default: ~/.config/devsetup/config.yaml)")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Write the run transcript here")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
def run(yes: bool, accept: tuple, decline: tuple, config_path: str, log_file: str, verbose: bool):
    """Provision this workstation.

    Walks the step menu interactively unless --yes, --accept or --decline
    is given. Unattended runs use the `steps:` policy from the config file;
    steps it does not mention are accepted.

    Examples:
        devsetup run                          # Interactive menu
        devsetup run --yes                    # Accept everything
        devsetup run --decline rust -y        # Everything but Rust
    """
    from devsetup.installer.environment import EnvironmentContext
    from devsetup.installer.exceptions import (
        ConfigError, FatalPrerequisiteError, get_error_code
    )
    from devsetup.installer.logging_config import get_log_path, setup_logging
    from devsetup.installer.policy import build_policy, validate_policy
    from devsetup.installer.steps import FATAL_STEP_NAMES, STEP_NAMES
    from devsetup.installer.ui import InstallerUI

    log_path = Path(log_file) if log_file else get_log_path()
    setup_logging(
        level=logging.DEBUG if verbose else None,
        log_file=log_path,
        quiet=not verbose
    )

    config = _load_config_or_exit(config_path)
    try:
        policy = build_policy(config.policy, accept, decline)
        validate_policy(policy, STEP_NAMES, FATAL_STEP_NAMES)
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(get_error_code(e))

    interactive = not (yes or accept or decline)
    ui = InstallerUI(console)
    if interactive and not sys.stdin.isatty():
        ui.print_warning("No terminal attached; running unattended with the configured policy.")
        interactive = False

    ctx = EnvironmentContext(ui=ui, config=config)
    orchestrator = build_orchestrator(ctx)

    ui.print_header()
    try:
        report = orchestrator.run(interactive=interactive, policy=policy)
    except FatalPrerequisiteError as e:
        ui.print_error(e.message)
        if e.remediation:
            ui.print_info(f"To fix: {e.remediation}")
        console.print(f"[dim]Log: {log_path}[/dim]")
        sys.exit(get_error_code(e))
    except KeyboardInterrupt:
        console.print()
        ui.print_warning("Setup interrupted.")
        sys.exit(130)

    ui.show_report(report)
    counts = report.counts()
    content = (
        f"{counts['success']} succeeded, {counts['skipped']} skipped, "
        f"{counts['failed']} failed\nLog: {log_path}"
    )
    if report.ok:
        ui.show_completion_panel("Setup complete!", content, POST_INSTALL_NOTES)
    else:
        ui.show_completion_panel(
            "Setup finished with failures", content, POST_INSTALL_NOTES, style="yellow"
        )
    sys.exit(0)


@main.command()
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Config file")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def doctor(config_path: str, json_output: bool):
    """Check which steps are already satisfied, without changing anything."""
    from devsetup.installer.environment import EnvironmentContext
    from devsetup.installer.logging_config import setup_logging
    from devsetup.installer.ui import InstallerUI

    setup_logging(quiet=True)
    config = _load_config_or_exit(config_path)
    ctx = EnvironmentContext(ui=InstallerUI(console), config=config)
    orchestrator = build_orchestrator(ctx)
    results = orchestrator.check()

    all_satisfied = all(value is not False for value in results.values())

    if json_output:
        print(json.dumps({"steps": results, "all_satisfied": all_satisfied}, indent=2))
        sys.exit(0 if all_satisfied else 1)

    console.print("[bold blue]devsetup Doctor[/bold blue]")
    console.print()
    for step in orchestrator.steps:
        satisfied = results[step.name]
        if satisfied is None:
            icon, message = "[dim]○[/dim]", "no check (always runs)" if step.predicate is None else "check failed"
        elif satisfied:
            icon, message = "[green]✓[/green]", step.predicate.describe()
        else:
            icon, message = "[red]✗[/red]", f"not satisfied: {step.predicate.describe()}"
        console.print(f"  {icon} {step.title}: {message}")

    console.print()
    if all_satisfied:
        console.print("[green]Everything checked is already in place.[/green]")
    else:
        console.print("[yellow]Some steps are not satisfied.[/yellow]")
        console.print("[dim]Run 'devsetup run' to install them.[/dim]")

    sys.exit(0 if all_satisfied else 1)


@main.command("steps")
def list_steps():
    """List the installation steps in run order."""
    from devsetup.installer.steps import INSTALL_STEPS

    table = Table(title="Installation Steps", border_style="blue")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Prompt")
    table.add_column("Check", style="dim")

    for i, step in enumerate(INSTALL_STEPS, 1):
        prompt = step.get("prompt") or ("[red]always (fatal)[/red]" if step.get("fatal") else "not asked")
        predicate = step.get("predicate")
        table.add_row(str(i), step["name"], prompt, predicate.describe() if predicate else "-")

    console.print(table)


if __name__ == "__main__":
    main()
