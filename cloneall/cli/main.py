"""CLI entrypoint that wires subcommands into a Typer app."""

import typer

from .commands.clone import app as clone_app
from .commands.logout import app as logout_app

app = typer.Typer(add_completion=False, help="Clone every GitHub and Bitbucket repository you can access.")


app.add_typer(clone_app, help="Clone all repositories")
app.add_typer(logout_app, help="Forget stored OAuth credentials")


if __name__ == "__main__":
    app()
