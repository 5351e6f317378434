"""Form CLI commands — check definitions and validate submissions."""

import asyncio
import json
from pathlib import Path
from typing import Any

import click
import yaml

from formforge.config import FormforgeConfig
from formforge.definitions.loader import DefinitionError, FormDefinitionLoader
from formforge.validation.services import validate_submission
from formforge.validation.types import ConfigurationError


def _load_data(path: Path) -> Any:
    with path.open(encoding="utf-8") as fh:
        if path.suffix.lower() == ".json":
            return json.load(fh)
        return yaml.safe_load(fh)


@click.command()
@click.argument("form", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def check(form: Path):
    """Check a form definition file against the form schema."""
    issues = FormDefinitionLoader().check(form)
    for issue in issues:
        click.echo(click.style(str(issue), fg="red"))

    if issues:
        click.echo(click.style(f"\n{len(issues)} error(s) found", fg="red", bold=True))
        raise SystemExit(1)

    click.echo(click.style("Form definition is valid.", fg="green", bold=True))


@click.command()
@click.argument("form", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("data", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--locale", default=None, help="Locale for messages (default: FORMFORGE_LOCALE or en)."
)
@click.option("--timezone", default=None, help="IANA zone for date-times without an offset.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as JSON.")
@click.pass_obj
def validate(
    config: FormforgeConfig | None,
    form: Path,
    data: Path,
    locale: str | None,
    timezone: str | None,
    as_json: bool,
):
    """Validate the submission in DATA against the form definition in FORM.

    Exits with status 1 when the submission is invalid.
    """
    config = config or FormforgeConfig.from_env()
    try:
        components = FormDefinitionLoader().load(form)
        values = _load_data(data)
        result = asyncio.run(validate_submission(
            components,
            values,
            locale=locale or config.locale,
            catalog_dir=config.catalog_dir,
            timezone=timezone or config.timezone,
        ))
    except DefinitionError as e:
        for issue in e.issues:
            click.echo(click.style(str(issue), fg="red"), err=True)
        raise SystemExit(2)
    except (ConfigurationError, ValueError, yaml.YAMLError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(2)

    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        for error in result.errors:
            click.echo(click.style(f"{error.field or '<root>'}: {error.message}", fg="red"))
        if result.valid:
            click.echo(click.style("Submission is valid.", fg="green", bold=True))
        else:
            click.echo(click.style(
                f"\n{len(result.errors)} violation(s) found", fg="red", bold=True
            ))

    if not result.valid:
        raise SystemExit(1)
