"""
purlkit CLI - Parse, build and validate package URLs.

Usage:
    purl parse "pkg:npm/%40angular/animation@12.3.1" --json
    purl build --type maven --namespace org.apache.commons --name commons-lang3 --version 3.12.0
    purl canonical "pkg:PyPI/Django_Rest@3.0"
    purl check purls.txt
"""

import json
import logging

import click
from rich.console import Console
from rich.table import Table

console = Console()


@click.group()
@click.version_option(package_name="purlkit")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
def cli(verbose):
    """purlkit - Package URL (purl) codec."""
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command(name="parse")
@click.argument("purl")
@click.option("--json", "as_json", is_flag=True, help="Print the components as JSON.")
def parse_command(purl, as_json):
    """Parse a purl and print its components."""
    from purlkit.core.errors import PurlError
    from purlkit.parsers.purl import parse

    try:
        package = parse(purl)
    except PurlError as e:
        raise click.BadParameter(str(e), param_hint="PURL") from e

    if as_json:
        click.echo(json.dumps(package.to_dict(), indent=2))
        return

    table = Table(title=package.to_string())
    table.add_column("Component", style="cyan")
    table.add_column("Value")
    for key, value in package.to_dict().items():
        if key == "qualifiers":
            value = "&".join(f"{k}={v}" for k, v in value.items())
        table.add_row(key, value or "")
    console.print(table)


@cli.command()
@click.option("--type", "-t", "purl_type", required=True, help="Package type, e.g. npm or maven.")
@click.option("--namespace", "-n", default=None, help="Namespace, '/'-separated.")
@click.option("--name", required=True, help="Package name.")
@click.option("--version", "-V", "version", default=None, help="Package version.")
@click.option(
    "--qualifier",
    "-q",
    "qualifiers",
    multiple=True,
    help="Qualifier as key=value. May be repeated.",
)
@click.option("--subpath", "-s", default=None, help="Path inside the package.")
def build(purl_type, namespace, name, version, qualifiers, subpath):
    """Build a canonical purl from its components."""
    from purlkit.core.errors import PurlError
    from purlkit.models.package_url import PackageURL

    pairs = []
    for item in qualifiers:
        key, sep, value = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected key=value, got {item!r}", param_hint="--qualifier")
        pairs.append((key, value))

    try:
        package = PackageURL(
            type=purl_type,
            namespace=namespace,
            name=name,
            version=version,
            qualifiers=pairs,
            subpath=subpath,
        ).normalize()
    except PurlError as e:
        raise click.UsageError(str(e)) from e

    click.echo(package.to_string())


@cli.command()
@click.argument("purl")
def canonical(purl):
    """Print the canonical form of a purl."""
    from purlkit.core.errors import PurlError
    from purlkit.parsers.purl import parse

    try:
        click.echo(parse(purl).to_string())
    except PurlError as e:
        raise click.BadParameter(str(e), param_hint="PURL") from e


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def check(path):
    """Validate a file with one purl per line. Blank lines and '#' comments are skipped."""
    from pathlib import Path

    from purlkit.core.errors import PurlError
    from purlkit.parsers.purl import parse

    failures = []
    total = 0
    for lineno, line in enumerate(Path(path).read_text().splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        total += 1
        try:
            parse(line)
        except PurlError as e:
            failures.append((lineno, line, type(e).__name__, str(e)))

    if failures:
        table = Table(title=f"Invalid purls in {path}")
        table.add_column("Line", justify="right")
        table.add_column("Purl", style="cyan")
        table.add_column("Error", style="red")
        table.add_column("Message")
        for lineno, line, kind, message in failures:
            table.add_row(str(lineno), line, kind, message)
        console.print(table)

    console.print(f"Checked: {total} | Valid: {total - len(failures)} | Invalid: {len(failures)}")
    if failures:
        click.get_current_context().exit(1)


if __name__ == "__main__":
    cli()
