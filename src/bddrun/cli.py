from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="bddrun", help="Run describe/it/before spec files")


@app.command()
def run(
    config: str = typer.Argument(help="Path to run YAML config"),
    spec: str | None = typer.Option(None, help="Run only this spec"),
    output_dir: str = typer.Option("runs", help="Output directory for run results"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    no_open: bool = typer.Option(
        False, "--no-open", help="Do not open report.html in browser after run"
    ),
):
    """Run the spec files listed in a config."""
    from bddrun.config import load_config
    from bddrun.runner import Runner
    from bddrun.reporting.junit import generate_report

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        run_config = load_config(config_path)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    runner = Runner(
        config=run_config,
        output_dir=Path(output_dir),
        spec_filter=spec,
        verbose=verbose,
    )

    try:
        run_dir = runner.execute()
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("Generating report...")
    report_path = generate_report(run_dir)

    typer.echo(f"Run complete: {run_dir}")
    typer.echo(f"Report: {report_path}")
    if not verbose:
        typer.echo(f"Debug log: {run_dir / 'debug.log'}")

    if not no_open:
        import webbrowser

        webbrowser.open(report_path.resolve().as_uri())

    # Exit with non-zero if any event failed
    if not runner.all_passed:
        raise typer.Exit(1)


@app.command()
def report(
    run_dir: str = typer.Argument(help="Path to run output directory"),
    open_report: bool = typer.Option(
        False, "--open", help="Open report.html in browser after generating"
    ),
):
    """Regenerate HTML report from a previous run."""
    from bddrun.reporting.junit import generate_report

    run_path = Path(run_dir)
    if not run_path.exists() or not (run_path / "junit.xml").exists():
        typer.echo(f"Error: not a valid run directory: {run_dir}", err=True)
        raise typer.Exit(1)

    report_path = generate_report(run_path)
    typer.echo(f"Report generated: {report_path}")

    if open_report:
        import webbrowser

        webbrowser.open(report_path.resolve().as_uri())


EXAMPLE_SPEC = '''\
from bddrun.assertions import equal, ok


def register(ctx):
    state = {"count": 0}

    def setup():
        state["count"] += 1

    ctx.before("setup", setup)

    def arithmetic():
        def adds():
            equal(1 + 1, 2)

        def counts_setup():
            equal(state["count"], 1)

        ctx.it("adds numbers", adds)
        ctx.it("ran setup once", counts_setup)

    ctx.describe("arithmetic", arithmetic)

    def truthy():
        ok(True)

    ctx.describe(lambda: ctx.it("is truthy", truthy))
'''


@app.command()
def init(
    dir: str = typer.Option(
        "bddrun", "--dir", help="Directory to initialize the spec project in"
    ),
):
    """Initialize a new spec project with an example config and spec file."""
    project_dir = Path(dir)

    if not project_dir.exists():
        project_dir.mkdir(parents=True, exist_ok=True)

    example = project_dir / "bddrun.yaml"
    if example.exists():
        typer.echo(f"bddrun.yaml already exists in {dir}, skipping.")
        return

    example.write_text("""\
specs:
  - specs/example_spec.py
""")

    specs_dir = project_dir / "specs"
    specs_dir.mkdir(parents=True, exist_ok=True)
    (specs_dir / "example_spec.py").write_text(EXAMPLE_SPEC)

    typer.echo(f"Initialized spec project in {dir}:")
    typer.echo("  bddrun.yaml            - example run config")
    typer.echo("  specs/example_spec.py  - example spec file")
