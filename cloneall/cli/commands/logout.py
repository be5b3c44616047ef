"""CLI for forgetting stored OAuth credentials."""

from __future__ import annotations

import typer

from ...config.settings import get_settings
from ...core.credentials import CredentialStore
from ...core.errors import CloneAllError
from ...core.types import Provider

app = typer.Typer(add_completion=False)


@app.command()
def logout(
    provider: list[Provider] = typer.Option(  # noqa: B008
        None, "--provider", "-p", case_sensitive=False, help="Provider(s) to forget (default: all)"
    ),
):
    """Remove stored tokens so the next clone re-authorizes in the browser."""
    store = CredentialStore(get_settings().credentials_path)
    try:
        for p in provider or list(Provider):
            if store.clear(p):
                typer.echo(f"[{p.value}] credentials removed")
            else:
                typer.echo(f"[{p.value}] no stored credentials")
    except CloneAllError as e:
        typer.secho(f"Error: {e}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1) from e
