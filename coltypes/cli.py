"""coltypes CLI - Render column types and literals for a SQL dialect."""

from typing import Optional

import typer
from typing_extensions import Annotated

from coltypes import __version__
from coltypes.core.config import config
from coltypes.dialects import get_dialect
from coltypes.exceptions import ColTypesError
from coltypes.sql_string import escape as escape_literal
from coltypes.types import parse_type_expression

app = typer.Typer(
    name="coltypes",
    help="coltypes - Logical column types rendered for SQL dialects",
    add_completion=True,
)

DialectOption = Annotated[
    Optional[str],
    typer.Option("--dialect", "-d", help="Target dialect (mysql, postgres, sqlite, mssql, oracle)"),
]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"coltypes version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """coltypes - Render DDL fragments and SQL literals per dialect."""
    pass


@app.command()
def ddl(
    expression: Annotated[
        str,
        typer.Argument(help="Type expression, e.g. 'DECIMAL(10,2) UNSIGNED'"),
    ],
    dialect: DialectOption = None,
) -> None:
    """Print the DDL fragment of a column type."""
    try:
        mapper = get_dialect(dialect or config.default_dialect)
        typer.echo(mapper.to_sql(parse_type_expression(expression)))
    except ColTypesError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command()
def escape(
    text: Annotated[
        str,
        typer.Argument(help="Text to quote as a SQL string literal"),
    ],
    dialect: DialectOption = None,
) -> None:
    """Print a string as a quoted SQL literal."""
    try:
        typer.echo(escape_literal(text, dialect=dialect or config.default_dialect))
    except ColTypesError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
