#!/usr/bin/env python3
"""fieldkit - Entry point."""
import json
import logging
import sys
import os
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import click
from colorama import Fore, Style, init
from pydantic import JsonValue
from pydantic_core import to_jsonable_python

from config import app_config
from fieldkit import __version__
from fieldkit.builder import CustomFields, PayloadMerger
from fieldkit.errors import FieldKitError
from fieldkit.extractor import PARSERS, FieldExtractor
from fieldkit.schema import to_document

# Initialize colorama
init(autoreset=True)

GENERIC_SHAPE = "raw"


def print_banner():
    """Print application banner."""
    print(f"{Fore.CYAN}{'=' * 44}")
    print(f"{Fore.CYAN}║   {Fore.WHITE}fieldkit{Fore.CYAN}                               ║")
    print(f"{Fore.CYAN}║   {Fore.WHITE}Dynamic custom field toolkit{Fore.CYAN}           ║")
    print(f"{Fore.CYAN}{'=' * 44}{Style.RESET_ALL}")
    print()


def fail(message: str):
    """Print an error and exit with status 1."""
    click.echo(f"{Fore.RED}❌ {message}", err=True)
    sys.exit(1)


def dump(value) -> str:
    """Render an extracted or built value as indented JSON."""
    return json.dumps(to_jsonable_python(value, by_alias=True), indent=2, ensure_ascii=False)


def get_extractor(shape: str) -> FieldExtractor:
    """Pick the parser for a shape, or a generic JSON extractor, over the configured layout."""
    if shape == GENERIC_SHAPE:
        return FieldExtractor(
            JsonValue,
            container=app_config.container,
            records=app_config.records,
            key=app_config.record_key,
        )
    return PARSERS[shape].with_layout(app_config.container, app_config.records, app_config.record_key)


def parse_assignments(ctx, param, values):
    """Split repeated ID=VALUE options into (id, value) pairs."""
    pairs = []
    for item in values:
        field_id, sep, value = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected ID=VALUE, got {item!r}", ctx=ctx, param=param)
        pairs.append((field_id.strip(), value))
    return pairs


SHAPE_OPTION = click.option(
    "--shape",
    type=click.Choice([GENERIC_SHAPE] + sorted(PARSERS)),
    default=GENERIC_SHAPE,
    show_default=True,
    help="Field shape to decode",
)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """fieldkit - Build, merge and extract dynamic custom fields."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("field_id")
@SHAPE_OPTION
def extract(file, field_id, shape):
    """Extract FIELD_ID from a single-record response FILE."""
    extractor = get_extractor(shape)

    try:
        with open(file, "rb") as f:
            value = extractor.extract(f, field_id)
    except FieldKitError as e:
        fail(str(e))

    click.echo(dump(value))


@cli.command("extract-all")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("field_id")
@SHAPE_OPTION
def extract_all(file, field_id, shape):
    """Extract FIELD_ID from every record of a search response FILE."""
    extractor = get_extractor(shape)

    try:
        with open(file, "rb") as f:
            values = extractor.extract_all(f, field_id)
    except FieldKitError as e:
        fail(str(e))

    click.echo(dump(values))


@cli.command()
@click.option("--entity", type=click.Path(exists=True, dir_okay=False), help="JSON file with the base entity")
@click.option("--text", multiple=True, callback=parse_assignments, help="Text field ID=VALUE")
@click.option("--select", multiple=True, callback=parse_assignments, help="Select field ID=OPTION")
@click.option("--number", multiple=True, callback=parse_assignments, help="Number field ID=VALUE")
@click.option("--multi-select", multiple=True, callback=parse_assignments, help="Multi-select field ID=V1,V2")
@click.option("--user", multiple=True, callback=parse_assignments, help="User field ID=ACCOUNT_ID")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the payload to a file")
def build(entity, text, select, number, multi_select, user, output):
    """Build a payload from an entity plus custom field values."""
    base = {}
    if entity:
        try:
            base = json.loads(Path(entity).read_text(encoding="utf-8"))
        except ValueError as e:
            fail(f"Invalid entity file {entity}: {e}")

    custom_fields = CustomFields()

    try:
        for field_id, value in text:
            custom_fields.text(field_id, value)
        for field_id, value in select:
            custom_fields.select(field_id, value)
        for field_id, value in number:
            try:
                number_value = float(value)
            except ValueError:
                fail(f"{field_id}: {value!r} is not a number")
            custom_fields.number(field_id, number_value)
        for field_id, value in multi_select:
            custom_fields.multi_select(field_id, [v.strip() for v in value.split(",") if v.strip()])
        for field_id, value in user:
            custom_fields.user(field_id, value)

        payload = PayloadMerger().merge_custom_fields(base, custom_fields)
        if not payload:
            click.echo(f"{Fore.YELLOW}⚠️  No custom fields given, using the entity as is", err=True)
            payload = to_document(base)
    except FieldKitError as e:
        fail(str(e))

    rendered = dump(payload)

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered + "\n", encoding="utf-8")
        click.echo(f"{Fore.GREEN}✅ Payload written to {output_path}")
    else:
        click.echo(rendered)


@cli.command()
def config_api():
    """Configure API credentials for this session."""
    print_banner()

    click.echo(f"{Fore.YELLOW}API Configuration")
    click.echo(f"{Fore.YELLOW}{'=' * 30}")

    base_url = click.prompt("API Base URL", default=app_config.api.base_url)
    api_user = click.prompt("API User (blank for bearer token)", default=app_config.api.api_user)
    api_token = click.prompt("API Token", hide_input=True, default="")

    app_config.api.base_url = base_url
    app_config.api.api_user = api_user
    app_config.api.api_token = api_token

    click.echo(f"{Fore.GREEN}✅ Configuration saved!")


if __name__ == "__main__":
    cli()
