#!/usr/bin/env python3
"""
Main CLI Entry Point for the Finance Dashboard

Provides the command-line interface over a saved dashboard workspace.
"""

import logging
import os

import click

from ..core.config import get_config, reload_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Finance Dashboard - Personal finance summaries from bank CSV exports

    Import transactions, then review totals, spending trends and budgets.
    """
    ctx.ensure_object(dict)

    if config_env or debug:
        if config_env:
            os.environ["FINDASH_ENV"] = config_env
        if debug:
            os.environ["LOG_LEVEL"] = "DEBUG"
        config = reload_config()
    else:
        config = get_config()

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("findash").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}")
        click.echo(f"Data directory: {config.data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from findash import __author__, __version__

    click.echo(f"Finance Dashboard v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Workspace Directory: {config_obj.storage.workspace_dir}")
    click.echo(f"  Default Workspace: {config_obj.storage.default_workspace}")
    click.echo(f"  Output Directory: {config_obj.output_dir}")
    click.echo(f"  CSV Encoding: {config_obj.ingest.encoding}")
    click.echo(f"  Alert Window: {config_obj.analysis.alert_window_days} days")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


from .dashboard import (  # noqa: E402
    alerts,
    budget_set,
    budgets,
    import_csv,
    report,
    summary,
    trends,
)

for command in (import_csv, summary, trends, budgets, budget_set, alerts, report):
    main.add_command(command)


if __name__ == "__main__":
    main()
