"""CLI for cloning every repository the user can reach on GitHub and Bitbucket."""

from __future__ import annotations

import typer

from ...config.settings import get_settings
from ...core.credentials import CredentialStore
from ...core.errors import CloneAllError
from ...core.types import Provider
from ...services.clone import clone_all

app = typer.Typer(add_completion=False)


@app.command()
def clone(
    dest: str | None = typer.Option(None, "--dest", help="Destination directory"),
    provider: list[Provider] = typer.Option(  # noqa: B008
        None, "--provider", "-p", case_sensitive=False, help="Provider(s) to clone from (default: github, then bitbucket)"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Authorize and list, print the clone command without running it"),
):
    """Authorize, list and clone all repositories, one provider after another."""
    s = get_settings()
    providers = provider or [Provider.github, Provider.bitbucket]
    try:
        clone_all(
            settings=s,
            store=CredentialStore(s.credentials_path),
            dest=dest or s.default_dest,
            providers=providers,
            dry_run=dry_run,
        )
    except CloneAllError as e:
        typer.secho(f"Error: {e}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1) from e
