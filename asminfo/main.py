"""
asminfo: CLI entrypoint.

Usage:
    python -m asminfo.main --help
    python -m asminfo.main generate --lang c# --output obj/AssemblyVersionInfo.cs
    python -m asminfo.main languages
    python -m asminfo.main keys info signing.snk
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from asminfo.core.observability.logging_config import setup_logging

from asminfo import __version__


@click.group()
@click.version_option(version=__version__, prog_name="asminfo")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to asminfo.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """asminfo: generate assembly version info for C#, Visual Basic and F#."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (flags win over ASMINFO_LOG_LEVEL) ─────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = None

    setup_logging(level=level)


# ── Generate ────────────────────────────────────────────────────


_FACT_OPTIONS = (
    ("--assembly-version", "assembly_version", "AssemblyVersion (e.g. 1.2.0.0)."),
    ("--file-version", "assembly_file_version", "AssemblyFileVersion."),
    ("--informational-version", "assembly_informational_version", "AssemblyInformationalVersion."),
    ("--assembly-name", "assembly_name", "Assembly name."),
    ("--title", "assembly_title", "AssemblyTitle."),
    ("--product", "assembly_product", "AssemblyProduct."),
    ("--copyright", "assembly_copyright", "AssemblyCopyright."),
    ("--company", "assembly_company", "AssemblyCompany."),
    ("--configuration", "assembly_configuration", "Build configuration (Debug, Release)."),
    ("--commit-id", "git_commit_id", "Git commit id."),
    ("--commit-date-ticks", "git_commit_date_ticks", "Commit date as .NET ticks (UTC)."),
    ("--root-namespace", "root_namespace", "Project root namespace."),
    ("--key-file", "assembly_originator_key_file", "Strong-name key file (.snk)."),
    ("--key-container", "assembly_key_container_name", "Strong-name key container name."),
)


def _fact_options(func):
    for flag, dest, help_text in reversed(_FACT_OPTIONS):
        func = click.option(flag, dest, default=None, help=help_text)(func)
    return func


def _load_facts(ctx: click.Context):
    """Load facts from --config or an auto-detected asminfo.yml (or none)."""
    from asminfo.core.config.loader import find_config_file, load_version_facts
    from asminfo.core.models.version_info import VersionFacts

    config_path: Path | None = ctx.obj.get("config_path")
    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        return VersionFacts()
    return load_version_facts(config_path)


@cli.command()
@click.option("--lang", "-l", "language", required=True, help="Target language: c#, vb, f#.")
@click.option("--output", "-o", "output", default=None, help="Output file path.")
@_fact_options
@click.option(
    "--emit-descriptive/--no-emit-descriptive",
    "emit_descriptive",
    default=None,
    help="Also declare Title/Product/Company/Copyright attributes.",
)
@click.option("--strict-keys", is_flag=True, help="Fail when the key pair cannot be read.")
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the file instead of writing it.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    language: str,
    output: str | None,
    emit_descriptive: bool | None,
    strict_keys: bool,
    to_stdout: bool,
    as_json: bool,
    **facts: str | None,
) -> None:
    """Generate the version info source file."""
    from asminfo.core.config.loader import ConfigError
    from asminfo.core.persistence.output_file import write_generated_file
    from asminfo.core.use_cases.generate import generate_version_file

    try:
        base = _load_facts(ctx)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    overrides: dict[str, object] = dict(facts)
    overrides["emit_non_version_custom_attributes"] = emit_descriptive
    result = generate_version_file(
        base.merged(overrides),
        language,
        output_path=output,
        strict_keys=strict_keys,
    )

    written = False
    if result.ok and not to_stdout:
        assert result.file is not None  # guaranteed when ok
        try:
            written = write_generated_file(result.file)
        except OSError as e:
            result.errors.append(f"Cannot write {result.file.path}: {e}")
            result.ok = False

    if as_json:
        data = result.to_dict()
        data["written"] = written
        click.echo(json.dumps(data, indent=2))
        sys.exit(0 if result.ok else 1)

    for warn in result.warnings:
        click.secho(f"⚠️  {warn}", fg="yellow", err=True)

    if not result.ok:
        for err in result.errors:
            click.secho(f"❌ {err}", fg="red", err=True)
        sys.exit(1)

    assert result.file is not None
    if to_stdout:
        click.echo(result.file.content, nl=False)
        return

    if ctx.obj.get("quiet"):
        return
    if written:
        click.secho(f"✅ Wrote {result.file.path} ({result.file.reason})", fg="green")
    else:
        click.echo(f"   {result.file.path} is up to date")


# ── Languages ───────────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def languages(as_json: bool) -> None:
    """List supported target languages and their identifiers."""
    from asminfo.core.services.emitters import list_emitters

    emitters = list_emitters()

    if as_json:
        click.echo(json.dumps(
            [
                {
                    "name": e.name,
                    "label": e.label,
                    "identifiers": list(e.identifiers()),
                    "extension": e.file_extension,
                }
                for e in emitters
            ],
            indent=2,
        ))
        return

    click.secho("Supported languages:", fg="cyan", bold=True)
    for e in emitters:
        click.echo(f"   • {e.label:<14} {e.file_extension:<5} {', '.join(e.identifiers())}")


# ── Register sub-command groups from asminfo/ui/cli/ ──────────────

from asminfo.ui.cli.keys import keys

cli.add_command(keys)


if __name__ == "__main__":
    cli()
