"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdpost.cli.commands import check_cmd, export_cmd, index_cmd, init_cmd, list_cmd, show_cmd


app = typer.Typer(name="mdpost", no_args_is_help=True, help="Front-matter blog post loader and index")

app.command(name="check")(check_cmd)
app.command(name="show")(show_cmd)
app.command(name="index")(index_cmd)
app.command(name="list")(list_cmd)
app.command(name="export")(export_cmd)
app.command(name="init")(init_cmd)
