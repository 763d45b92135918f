"""CLI entrypoint: Typer app definition and command registration"""

import typer

from pkgdiff.cli.commands import compare_cmd, diff_cmd


app = typer.Typer(name="pkgdiff", no_args_is_help=True, help="Structured line and inline diffs between file versions")

app.command(name="diff")(diff_cmd)
app.command(name="compare")(compare_cmd)
