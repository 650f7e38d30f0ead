import re
import typer

EMAIL_REGEX = re.compile(r"^[\w\.+-]+@[\w\.-]+\.\w+$")

def validate_email(email: str) -> bool:
    if not EMAIL_REGEX.match(email):
        typer.echo("Invalid email.")
        return False
    return True

def validate_password(password: str) -> bool:
    """
    Validates password strength:
    - At least 8 characters
    - At least one letter
    - At least one number
    """
    if len(password) < 8:
        typer.echo("Password must be at least 8 characters long.")
        return False

    if not re.search(r"[a-zA-Z]", password):
        typer.echo("Password must contain at least one letter.")
        return False

    if not re.search(r"\d", password):
        typer.echo("Password must contain at least one number.")
        return False

    return True
