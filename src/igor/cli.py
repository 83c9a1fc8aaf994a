"""
Igor Command Line Interface

Main entry point for the igor CLI.
"""

import sys
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.table import Table

console = Console()

PREVIEW_VIEWS = [
    "welcome", "detecting", "system_info", "driver_selection",
    "confirmation", "installing", "complete", "error",
]


def _fail(error: Exception) -> None:
    """Print an error and exit with its mapped code."""
    from igor.wizard.exceptions import get_error_code

    console.print(f"[red]Error:[/red] {error}", highlight=False)
    sys.exit(get_error_code(error))


def _load_config(config_path: Optional[str]):
    from igor.wizard.config import load_config

    return load_config(Path(config_path) if config_path else None)


def preview_messages(view: str) -> List:
    """Messages that bring a fresh wizard to the given step with sample data."""
    from dataclasses import replace

    from igor.wizard import messages as m
    from igor.wizard.exceptions import InstallationError
    from igor.wizard.schema import DEFAULT_COMPONENTS, DEFAULT_DRIVERS, sample_gpu_info
    from igor.wizard.states import ViewState

    gpu = sample_gpu_info()
    driver = DEFAULT_DRIVERS[0]
    components = tuple(replace(c, selected=True) for c in DEFAULT_COMPONENTS if c.selected)

    state = ViewState.parse(view)
    if state is ViewState.DETECTING:
        return [m.StartDetection(), m.DetectionStep(2)]
    if state is ViewState.SYSTEM_INFO:
        return [m.NavigateToSystemInfo(gpu)]
    if state is ViewState.DRIVER_SELECTION:
        return [m.NavigateToDriverSelection(gpu)]
    if state is ViewState.CONFIRMATION:
        return [m.NavigateToConfirmation(gpu, driver, components)]
    if state is ViewState.INSTALLING:
        return [
            m.StartInstallation(gpu, driver, components),
            m.InstallationStepStarted(0),
            m.InstallationStepCompleted(0),
            m.InstallationStepStarted(1),
            m.InstallationLog("Writing /etc/modprobe.d/blacklist-nouveau.conf"),
        ]
    if state is ViewState.COMPLETE:
        return [m.NavigateToComplete(gpu, driver, components)]
    if state is ViewState.ERROR:
        err = InstallationError(
            "nvidia-dkms-550 failed to build",
            step="Installing NVIDIA Driver",
            details="dkms exited with status 10",
        )
        return [m.NavigateToError(err, "Installing NVIDIA Driver")]
    return []


@click.group()
@click.version_option(package_name="igor-tui")
def main():
    """IGOR: interactive NVIDIA driver installation wizard"""
    pass


@main.command()
@click.option("--script", "script_path", type=click.Path(exists=True, dir_okay=False),
              help="YAML session script whose events are posted while running")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
              help="YAML config file")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Write debug log to this file")
@click.option("--inline", is_flag=True, help="Render inline instead of the alternate screen")
def run(script_path: Optional[str], config_path: Optional[str], log_file: Optional[str], inline: bool):
    """Run the interactive wizard.

    Keys are read line by line from stdin: type a key name (up, down,
    tab, space, esc, q, ?) and press enter. An empty line is enter.

    Examples:
        igor run
        igor run --script demo.yaml --log-file igor.log
    """
    from igor import __version__
    from igor.wizard import Styles, WizardOrchestrator
    from igor.wizard.exceptions import IgorError
    from igor.wizard.logging_config import setup_logging
    from igor.wizard.runtime import Program
    from igor.wizard.script import load_script

    # Frames own the terminal, so logs only go to a file
    setup_logging(log_file=Path(log_file) if log_file else None, quiet=True)

    try:
        config = _load_config(config_path)
        script = None
        if script_path:
            script = load_script(
                Path(script_path),
                drivers=config.driver_options(),
                components=config.component_options(),
            )
    except IgorError as e:
        _fail(e)

    model = WizardOrchestrator(
        version=__version__,
        styles=Styles(color=config.color),
        config=config,
    )
    program = Program(model, console=console, alt_screen=config.alt_screen and not inline)
    program.read_keys(sys.stdin, quit_on_eof=script is None)
    if script is not None:
        program.post_all(script.events, lambda e: e.delay, lambda e: e.message)

    try:
        final = program.run()
    except KeyboardInterrupt:
        model.shutdown()
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(130)

    sys.exit(0 if final.error is None else 1)


@main.command()
@click.argument("script_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--width", type=int, default=None, help="Override the script's terminal width")
@click.option("--height", type=int, default=None, help="Override the script's terminal height")
@click.option("--all-frames", is_flag=True, help="Print every frame, not just the last")
@click.option("--color", is_flag=True, help="Include ANSI colors in the output")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
              help="YAML config file")
def replay(script_path: str, width: Optional[int], height: Optional[int],
           all_frames: bool, color: bool, config_path: Optional[str]):
    """Replay a session script without a terminal and print the result.

    Examples:
        igor replay session.yaml
        igor replay session.yaml --all-frames --width 120
    """
    from igor import __version__
    from igor.wizard import Styles, WizardOrchestrator
    from igor.wizard.exceptions import IgorError
    from igor.wizard.logging_config import setup_logging
    from igor.wizard.runtime import HeadlessDriver
    from igor.wizard.script import load_script

    setup_logging(quiet=True)

    try:
        config = _load_config(config_path)
        script = load_script(
            Path(script_path),
            drivers=config.driver_options(),
            components=config.component_options(),
        )
    except IgorError as e:
        _fail(e)

    model = WizardOrchestrator(version=__version__, styles=Styles(color=color), config=config)
    driver = HeadlessDriver(
        model,
        width=width if width is not None else script.width,
        height=height if height is not None else script.height,
        record_frames=all_frames,
    )
    driver.start()
    driver.send(*script.messages())

    if all_frames:
        for i, frame in enumerate(driver.frames, start=1):
            click.echo(f"--- frame {i} ---")
            click.echo(frame)
    else:
        click.echo(driver.view())
    click.echo(f"--- final view: {driver.model.current_view} ---")


@main.command()
@click.argument("view", type=click.Choice(PREVIEW_VIEWS, case_sensitive=False))
@click.option("--width", type=int, default=80, help="Terminal width")
@click.option("--height", type=int, default=24, help="Terminal height")
@click.option("--color", is_flag=True, help="Include ANSI colors in the output")
def preview(view: str, width: int, height: int, color: bool):
    """Render one wizard step with sample data."""
    from igor import __version__
    from igor.wizard import Styles, WizardOrchestrator
    from igor.wizard.logging_config import setup_logging
    from igor.wizard.runtime import HeadlessDriver

    setup_logging(quiet=True)

    model = WizardOrchestrator(version=__version__, styles=Styles(color=color))
    driver = HeadlessDriver(model, width=width, height=height)
    driver.start()
    driver.send(*preview_messages(view))
    click.echo(driver.view())


@main.command()
def keys():
    """List the default key bindings."""
    from igor.wizard.keys import default_key_map

    table = Table(title="Key Bindings", show_header=True)
    table.add_column("Action", style="cyan")
    table.add_column("Keys")
    table.add_column("Help")

    for name, binding in default_key_map().bindings().items():
        shown = ", ".join(dict.fromkeys("space" if k == " " else k for k in binding.keys))
        table.add_row(name, shown, binding.help_desc)

    console.print(table)


@main.command()
def env():
    """List the environment variables igor reads."""
    from igor.wizard.logging_config import ENV_VARS

    table = Table(title="Environment", show_header=True)
    table.add_column("Variable", style="cyan")
    table.add_column("Description")

    for name, description in ENV_VARS.items():
        table.add_row(name, description)

    console.print(table)


if __name__ == "__main__":
    main()
