"""
CLI commands for strong-name keys.

Thin wrappers over ``asminfo.core.services.key_info`` and
``asminfo.core.services.strong_name``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


@click.group()
def keys() -> None:
    """Strong-name keys: inspect public key and token, create key pairs."""


@keys.command("info")
@click.argument("key_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def info(key_file: Path, as_json: bool) -> None:
    """Show the public key and public key token of a .snk file."""
    from asminfo.core.services.key_info import KeyDerivationError, resolve_key_info

    try:
        result = resolve_key_info(key_file)
    except KeyDerivationError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    key_info = result.key_info

    if as_json:
        click.echo(json.dumps({
            "path": str(key_file),
            "public_key": key_info.public_key if key_info else None,
            "public_key_token": key_info.public_key_token if key_info else None,
            "warnings": result.warnings,
        }, indent=2))
        sys.exit(0 if key_info else 1)

    for warn in result.warnings:
        click.secho(f"⚠️  {warn}", fg="yellow", err=True)

    if key_info is None:
        click.secho(f"❌ No public key found in {key_file} (expected a .snk file)", fg="red", err=True)
        sys.exit(1)

    click.secho(f"🔑 {key_file}", fg="cyan", bold=True)
    click.echo(f"   Public key token: {key_info.public_key_token}")
    click.echo("   Public key:")
    hex_key = key_info.public_key
    for i in range(0, len(hex_key), 64):
        click.echo(f"      {hex_key[i:i + 64]}")


@keys.command("generate")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--bits", default=1024, show_default=True, type=int, help="RSA key size.")
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
def generate(output: Path, bits: int, force: bool) -> None:
    """Create a new strong-name key pair (.snk)."""
    from asminfo.core.services.strong_name import (
        generate_key_pair_blob,
        public_key_from_private_key_blob,
        strong_name_token,
    )

    if output.exists() and not force:
        click.secho(f"❌ {output} already exists (use --force to overwrite)", fg="red", err=True)
        sys.exit(1)

    try:
        blob = generate_key_pair_blob(bits)
    except ValueError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(blob)

    token = strong_name_token(public_key_from_private_key_blob(blob)).hex()
    click.secho(f"✅ Wrote {bits}-bit key pair to {output}", fg="green")
    click.echo(f"   Public key token: {token}")
