"""formforge CLI entry point."""

import logging

import click

from formforge.config import FormforgeConfig


@click.group()
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (default: FORMFORGE_LOG_LEVEL or WARNING).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """formforge — validate submissions against form definitions."""
    config = FormforgeConfig.from_env()
    if log_level:
        config.log_level = log_level.upper()
    logging.basicConfig(
        level=config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = config


# Register subcommands
from formforge.cli.validate_cmd import check, validate  # noqa: E402

cli.add_command(check)
cli.add_command(validate)
