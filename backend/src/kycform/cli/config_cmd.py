"""Configuration CLI commands: validate and show."""

import asyncio
from pathlib import Path

import click

from kycform.config import FormSettings
from kycform.configuration.loader import ConfigurationError, YamlConfigurationLoader
from kycform.configuration.validator import (
    validate_configuration_dir,
    validate_configuration_file,
)


@click.group()
def config():
    """Country configuration commands."""
    pass


@config.command()
@click.option(
    "--path",
    "target_path",
    default=None,
    type=click.Path(exists=True, path_type=Path),
    help="Validate a single YAML file instead of the whole configuration directory.",
)
@click.pass_obj
def validate(settings: FormSettings, target_path: Path | None):
    """Validate configuration documents against the schema, then load them."""
    if target_path is not None:
        config_dir = target_path.parent
        files = [target_path]
        issues = validate_configuration_file(target_path)
    else:
        config_dir = settings.config_path
        files = sorted(config_dir.glob("*.yaml")) if config_dir.is_dir() else []
        issues = validate_configuration_dir(config_dir)

    for issue in issues:
        click.echo(click.style(str(issue), fg="red"))

    if issues:
        click.echo(f"\n{len(issues)} schema error(s) found.", err=True)
        raise SystemExit(1)

    # Schema-valid documents can still fail to map (unsupported country, bad regex)
    loader = YamlConfigurationLoader(config_dir)
    failures = 0
    for yaml_file in files:
        try:
            configuration = asyncio.run(loader.load(yaml_file.stem))
        except ConfigurationError as e:
            failures += 1
            click.echo(click.style(f"[ERROR] {yaml_file}: {e}", fg="red"))
            continue
        click.echo(f"  {yaml_file.name}: {len(configuration.fields)} field(s)")

    if failures:
        click.echo(f"\n{failures} configuration(s) failed to load.", err=True)
        raise SystemExit(1)

    click.echo(click.style("All configurations are valid.", fg="green"))


@config.command()
@click.argument("code")
@click.pass_obj
def show(settings: FormSettings, code: str):
    """Print the fields of one country's form."""
    loader = YamlConfigurationLoader(settings.config_path)
    try:
        configuration = asyncio.run(loader.load(code))
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    country = configuration.country_code
    click.echo(f"{country.flag_emoji} {country.display_name} ({country.code})")
    for definition in configuration.fields:
        flags = []
        if definition.required:
            flags.append("required")
        if definition.read_only:
            flags.append("read-only")
        flag_text = f" [{', '.join(flags)}]" if flags else ""
        click.echo(f"  {definition.id} ({definition.type}){flag_text}: {definition.label}")
        for rule in definition.rules:
            click.echo(f"    - {type(rule).__name__}")
