"""component-build CLI — build a component directory into build.js/build.css/assets."""

from __future__ import annotations

from pathlib import Path

import anyio
import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from component_build.context import BuildContext
from component_build.core import build as run_build
from component_build.core import read_manifest
from component_build.errors import BuildError
from component_build.types import BuildOptions
from component_build.validator import check_manifest

app = typer.Typer(add_completion=False, help="Build components into deployable assets")
console = Console()


@app.command()
def build(
    path: str = typer.Argument(".", help="Component directory (holds component.json)"),
    install: bool = typer.Option(True, "--install/--no-install", help="Install missing dependencies"),
    require: bool = typer.Option(True, "--require/--no-require", help="Prepend the require loader"),
    autorequire: bool = typer.Option(
        True, "--autorequire/--no-autorequire", help="Require the root component at the end"
    ),
    development: bool = typer.Option(False, "--dev", help="Include development dependencies"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log warnings and progress"),
    scripts: bool = typer.Option(True, "--scripts/--no-scripts"),
    styles: bool = typer.Option(True, "--styles/--no-styles"),
    files: bool = typer.Option(True, "--files/--no-files"),
    install_dir: str | None = typer.Option(None, "--install-dir", help="Default: <path>/components"),
    build_dir: str | None = typer.Option(None, "--build-dir", help="Default: <path>/build"),
    script_file: str = typer.Option("build.js", "--script-file"),
    style_file: str = typer.Option("build.css", "--style-file"),
) -> None:
    options = BuildOptions.coerce(
        {
            "install": install,
            "require": require,
            "autorequire": autorequire,
            "development": development,
            "verbose": verbose,
            "scripts": scripts,
            "styles": styles,
            "files": files,
            "install_dir": install_dir,
            "build_dir": build_dir,
            "script_build_file": script_file,
            "style_build_file": style_file,
        }
    )
    outcome = run_build(Path(path), options)

    table = Table(title="Build Summary")
    table.add_column("Result", style="cyan")
    table.add_column("Detail")
    for artifact in outcome.artifacts:
        table.add_row("written", escape(str(artifact)))
    for err in outcome.errors:
        table.add_row(f"[red]{err.stage}[/red]", escape(str(err)))
    console.print(table)

    if not outcome.ok:
        raise typer.Exit(code=1)
    rprint("[green]Build complete.[/green]")


@app.command()
def validate(
    path: str = typer.Argument(".", help="Component directory (holds component.json)"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    ctx = BuildContext(Path(path), BuildOptions(verbose=verbose))
    try:
        manifest = anyio.run(read_manifest, ctx)
    except BuildError as err:
        rprint(f"[red]{err.stage}:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err

    invalid = check_manifest(ctx.toolchain.validate, manifest, ctx.validate_options())
    if invalid is not None:
        rprint(f"[red]invalid:[/red] {escape(str(invalid))}")
        raise typer.Exit(code=1)
    rprint(f"[green]{escape(str(ctx.manifest_path))} is valid.[/green]")


if __name__ == "__main__":
    app()
