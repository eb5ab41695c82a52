"""
Fornecedor API CLI

Command-line interface for running and administering the API.

Commands:
- serve: Run the HTTP server
- init-db: Create every table
- create-user: Register an account
- grant-claim: Give a claim to a user (e.g. ExcluirFornecedor)
- add-role: Give a role to a user
- list-fornecedores: Print the fornecedores table
"""

from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from fornecedor_api.core.logging import setup_logging

app = typer.Typer(
    name="fornecedor-api",
    help="Fornecedor API CLI",
)

console = Console()


def get_db():
    """Get database session."""
    from fornecedor_api.core.database import get_db as _get_db
    return next(_get_db())


def _print_errors(errors: list[dict[str, str]]) -> None:
    for error in errors:
        rprint(f"[red]{error['code']}: {error['description']}[/red]")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the HTTP server with uvicorn."""
    import uvicorn

    uvicorn.run("fornecedor_api.main:app", host=host, port=port, reload=reload)


@app.command()
def init_db():
    """Create every table (use Alembic for managed environments)."""
    setup_logging()
    from fornecedor_api.core.database import create_tables

    create_tables()
    rprint("[green]Tables created[/green]")


@app.command()
def create_user(
    email: str = typer.Argument(..., help="Account e-mail"),
    password: str = typer.Argument(..., help="Account password"),
):
    """Register an account with a confirmed e-mail."""
    setup_logging()
    from fornecedor_api.identity.service import IdentityService

    db = get_db()
    try:
        result = IdentityService(db).create_user(email, password)
    finally:
        db.close()

    if not result.succeeded:
        _print_errors(result.errors)
        raise typer.Exit(1)
    rprint(f"[green]User {email} created[/green]")


@app.command()
def grant_claim(
    email: str = typer.Argument(..., help="Account e-mail"),
    claim_type: str = typer.Argument(..., help="Claim type, e.g. ExcluirFornecedor"),
    claim_value: Optional[str] = typer.Argument(None, help="Claim value"),
):
    """Give a claim to a user. Takes effect on the user's next token."""
    setup_logging()
    from fornecedor_api.identity.service import IdentityService

    db = get_db()
    try:
        result = IdentityService(db).add_claim(email, claim_type, claim_value or "")
    finally:
        db.close()

    if not result.succeeded:
        _print_errors(result.errors)
        raise typer.Exit(1)
    rprint(f"[green]Claim {claim_type} granted to {email}[/green]")


@app.command()
def add_role(
    email: str = typer.Argument(..., help="Account e-mail"),
    role: str = typer.Argument(..., help="Role name"),
):
    """Give a role to a user."""
    setup_logging()
    from fornecedor_api.identity.service import IdentityService

    db = get_db()
    try:
        result = IdentityService(db).add_role(email, role)
    finally:
        db.close()

    if not result.succeeded:
        _print_errors(result.errors)
        raise typer.Exit(1)
    rprint(f"[green]Role {role} granted to {email}[/green]")


@app.command()
def list_fornecedores():
    """Print every fornecedor."""
    setup_logging()
    from fornecedor_api.persistence.repo import FornecedorRepository

    db = get_db()
    try:
        fornecedores = FornecedorRepository(db).list()

        if not fornecedores:
            rprint("[yellow]No fornecedores found[/yellow]")
            return

        table = Table(title="Fornecedores")
        table.add_column("ID", style="dim")
        table.add_column("Nome")
        table.add_column("Documento")
        table.add_column("Ativo")

        for fornecedor in fornecedores:
            table.add_row(
                str(fornecedor.id),
                fornecedor.nome,
                fornecedor.documento,
                "sim" if fornecedor.ativo else "não",
            )

        console.print(table)
    finally:
        db.close()


if __name__ == "__main__":
    app()
