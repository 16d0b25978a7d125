"""Form CLI commands: fill and submit a form headlessly."""

import asyncio
import json
from datetime import date

import click

from kycform.config import FormSettings
from kycform.core.types import FieldKind
from kycform.forms.controller import FormController, FormStatus, make_form_controller


def _parse_assignments(assignments: tuple[str, ...]) -> dict[str, str]:
    values: dict[str, str] = {}
    for item in assignments:
        field_id, sep, value = item.partition("=")
        if not sep or not field_id:
            raise click.BadParameter(f"expected id=value, got '{item}'", param_hint="--set")
        values[field_id] = value
    return values


def _apply_values(controller: FormController, values: dict[str, str]) -> list[str]:
    """Apply CLI values to the loaded fields, returning problems found."""
    problems = []
    for field_id, value in values.items():
        state = controller.field(field_id)
        if state is None:
            problems.append(f"{field_id}: unknown field")
            continue
        if state.read_only:
            problems.append(f"{field_id}: field is read-only")
            continue
        if state.type.kind == FieldKind.DATE:
            try:
                state.set_date(date.fromisoformat(value) if value else None)
            except ValueError:
                problems.append(f"{field_id}: expected a date as YYYY-MM-DD")
        else:
            state.set_value(value)
    return problems


async def _fill(controller: FormController, code: str, values: dict[str, str]) -> list[str]:
    await controller.select_country(code)
    if controller.status != FormStatus.READY:
        return [f"no form could be loaded for '{code}'"]
    problems = _apply_values(controller, values)
    if problems:
        return problems
    controller.submit()
    return [
        f"{state.id}: {state.error_message}"
        for state in controller.field_states
        if state.error_message
    ]


@click.group()
def form():
    """Form commands."""
    pass


@form.command()
@click.argument("code")
@click.option(
    "--set",
    "assignments",
    multiple=True,
    metavar="ID=VALUE",
    help="Field value; dates as YYYY-MM-DD. Repeatable.",
)
@click.pass_obj
def fill(settings: FormSettings, code: str, assignments: tuple[str, ...]):
    """Load a country's form, apply values and submit it.

    Prints the submitted payload as JSON, or the field errors.
    """
    values = _parse_assignments(assignments)
    controller = make_form_controller(settings)
    problems = asyncio.run(_fill(controller, code, values))

    if problems:
        for problem in problems:
            click.echo(click.style(problem, fg="red"), err=True)
        raise SystemExit(1)

    click.echo(json.dumps(controller.submission, default=str, indent=2, sort_keys=True))
