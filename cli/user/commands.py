import typer

from cli.core.session import load_token
from cli.core.api import api_get_my_info


app = typer.Typer(help="Current user commands")


@app.command("me")
def me():
    """
    Show the logged-in user's information.
    """
    token = load_token()
    if not token:
        typer.echo("No active session. Please run `carpool auth login` first.")
        raise typer.Exit(code=1)

    info = api_get_my_info(token)
    if info is None:
        typer.echo("Could not reach the backend.")
        raise typer.Exit(code=1)

    if "error_code" in info:
        if info["error_code"] == "EXPIRED_TOKEN":
            typer.echo("Access token expired. Run `carpool auth reissue`.")
        else:
            typer.echo(f"Request rejected: {info['error_code']}")
        raise typer.Exit(code=1)

    typer.echo(f"ID:     {info['id']}")
    typer.echo(f"Email:  {info['email']}")
    typer.echo(f"Name:   {info['name']}")
    typer.echo(f"Role:   {info['role']}")
    typer.echo(f"Status: {info['status']}")
