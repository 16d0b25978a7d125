"""kycform CLI entry point."""

import logging

import click

from kycform.config import FormSettings


@click.group()
@click.pass_context
def cli(ctx):
    """kycform: configuration-driven KYC forms."""
    settings = FormSettings.from_env()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = settings


# Register subcommand groups
from kycform.cli.config_cmd import config  # noqa: E402
from kycform.cli.form_cmd import form  # noqa: E402

cli.add_command(config)
cli.add_command(form)
