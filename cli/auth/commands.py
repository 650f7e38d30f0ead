import getpass
import typer

from cli.core.session import save_tokens, load_refresh_token, clear_tokens, is_logged_in
from cli.core.api import api_signup, api_login, api_reissue, api_logout
from cli.core.utils import validate_email, validate_password


app = typer.Typer(help="Authentication commands (signup, login, reissue, logout)")


@app.command("signup")
def signup(
    email: str = typer.Option(None, "--email", "-e", help="Email"),
    name: str = typer.Option(None, "--name", "-n", help="Display name"),
):
    """
    Register a new account and start a session.
    """
    if is_logged_in():
        typer.echo("Session already active. Logout first.")
        raise typer.Exit(code=1)

    if email is None:
        email = typer.prompt("Email")
    if not validate_email(email):
        raise typer.Exit(code=1)

    if name is None:
        name = typer.prompt("Name")
    if not name.strip():
        typer.echo("Name cannot be empty.")
        raise typer.Exit(code=1)

    password = getpass.getpass("Password: ")
    password_confirm = getpass.getpass("Confirm password: ")
    if password != password_confirm:
        typer.echo("Passwords do not match.")
        raise typer.Exit(code=1)
    if not validate_password(password):
        raise typer.Exit(code=1)

    tokens = api_signup(email, password, name)
    if tokens is None:
        typer.echo("Signup failed (email already registered or API error).")
        raise typer.Exit(code=1)

    save_tokens(tokens["access_token"], tokens["refresh_token"])
    typer.echo(f"Account created. Logged in as '{email}'.")


@app.command("login")
def login(
    email: str = typer.Option(None, "--email", "-e", help="Email"),
):
    """
    Login to the system. Only allowed if no session is active.
    """
    if is_logged_in():
        typer.echo("Session already active. Logout first to remove current session token.")
        raise typer.Exit(code=1)

    if email is None:
        email = typer.prompt("Email")
    if not validate_email(email):
        raise typer.Exit(code=1)

    password = getpass.getpass("Password: ")

    tokens = api_login(email, password)
    if tokens is None:
        typer.echo("Login failed (invalid credentials or API error).")
        raise typer.Exit(code=1)

    save_tokens(tokens["access_token"], tokens["refresh_token"])
    typer.echo(f"Login successful as '{email}'.")


@app.command("reissue")
def reissue():
    """
    Get a fresh access token using the stored refresh token.
    """
    refresh_token = load_refresh_token()
    if not refresh_token:
        typer.echo("No active session. Please login first.")
        raise typer.Exit(code=1)

    tokens = api_reissue(refresh_token)
    if tokens is None:
        typer.echo("Reissue failed. Your session has ended, please login again.")
        clear_tokens()
        raise typer.Exit(code=1)

    save_tokens(tokens["access_token"], tokens["refresh_token"])
    typer.echo("Access token renewed.")


@app.command("logout")
def logout():
    """
    End session and delete local tokens.
    """
    refresh_token = load_refresh_token()
    if refresh_token:
        if api_logout(refresh_token):
            typer.echo("Logged out from backend.")
        else:
            typer.echo("Warning: Failed to logout from backend.")

    clear_tokens()
    typer.echo("Session ended.")
