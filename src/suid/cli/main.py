"""
SUID CLI

Command-line interface for generating and decoding identifiers.

Usage:
    suid new
    suid new --count 5 --format dec
    suid new --seed 42
    suid inspect 55de233819d51b1a8a67e0ac --json
    suid machine
"""

import json
from enum import Enum
from typing import Optional

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from suid.factory import IdentifierFactory, get_default_factory
from suid.identifier import SUID
from suid.kernel.errors import InitializationFailure, InvalidIdentifier
from suid.kernel.logging import configure_logging, is_production

app = typer.Typer(
    name="suid",
    help="SUID - thread-safe sequential unique identifiers",
    add_completion=False,
)


class OutputFormat(str, Enum):
    hex = "hex"
    dec = "dec"
    uuencode = "uuencode"
    binary = "binary"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@app.callback()
def main(
    log_level: Annotated[
        LogLevel,
        typer.Option("--log-level", case_sensitive=False, help="Logging level"),
    ] = LogLevel.WARNING,
    json_logs: Annotated[
        Optional[bool],
        typer.Option("--json-logs/--console-logs", help="JSON log output (default: on in production)"),
    ] = None,
) -> None:
    """Generate and decode 12-byte sequential unique identifiers"""
    configure_logging(
        json_output=is_production() if json_logs is None else json_logs,
        log_level=log_level.value,
    )


def _get_factory() -> IdentifierFactory:
    try:
        return get_default_factory()
    except ValidationError as exc:
        typer.echo(f"Error: Invalid SUID_* settings: {exc}", err=True)
        raise typer.Exit(1)


@app.command()
def new(
    count: Annotated[
        int,
        typer.Option("--count", "-n", min=1, help="Number of identifiers"),
    ] = 1,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output encoding"),
    ] = OutputFormat.hex,
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Reseed the sequence counter before generating"),
    ] = None,
) -> None:
    """Generate new identifiers"""
    factory = _get_factory()
    if seed is not None:
        factory.reset_sequence_counter(seed)

    for _ in range(count):
        try:
            ident = factory.create()
        except InitializationFailure as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1)

        if output_format is OutputFormat.binary:
            typer.echo(ident.binary, nl=False)
        elif output_format is OutputFormat.uuencode:
            typer.echo(ident.uuencode, nl=False)
        elif output_format is OutputFormat.dec:
            typer.echo(str(ident.dec))
        else:
            typer.echo(ident.hex)


@app.command()
def inspect(
    identifier: Annotated[str, typer.Argument(help="24-character hex identifier")],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Decode the fields of an identifier"""
    try:
        ident = SUID.from_hex(identifier.strip())
    except InvalidIdentifier as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    fields = ident.fields()
    fields["dec"] = str(ident.dec)
    if as_json:
        typer.echo(json.dumps(fields, indent=2))
        return

    typer.echo(f"SUID: {ident.hex}")
    typer.echo(f"  Created:    {fields['created_at']} ({ident.timestamp})")
    typer.echo(f"  Machine ID: {ident.machine_id}")
    typer.echo(f"  PID:        {ident.pid}")
    typer.echo(f"  Sequence:   {ident.sequence} (0x{ident.sequence:06x})")
    typer.echo(f"  Decimal:    {fields['dec']}")


@app.command()
def machine() -> None:
    """Show this process's machine identity"""
    identity = _get_factory().machine
    try:
        value = identity.resolve()
    except InitializationFailure as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Machine ID: {value.hex()}")
    typer.echo(f"  Source: {identity.source}")


if __name__ == "__main__":
    app()
