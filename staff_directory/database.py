# database.py
import click
from flask.cli import with_appcontext
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from sqlalchemy.exc import IntegrityError

# Import inside functions later to avoid circular import
db = SQLAlchemy()
bcrypt = Bcrypt()


def init_db(app):
    """
    Initialize DB and Bcrypt with the Flask app and create the tables.
    Called from create_app():
        from staff_directory.database import init_db
        init_db(app)
    """
    db.init_app(app)
    bcrypt.init_app(app)
    app.cli.add_command(create_user_command)

    with app.app_context():
        from staff_directory import models  # noqa: F401  (registers tables)
        db.create_all()


@click.command("create-user")
@click.argument("username")
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--role", type=click.Choice(["admin", "viewer"]), default="viewer", show_default=True)
@with_appcontext
def create_user_command(username, email, password, role):
    """Create a login account able to obtain API tokens."""
    from flask import current_app
    from staff_directory.models import User

    user = User(username=username.strip(), email=email.strip().lower(), role=role)
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise click.ClickException(f"User '{username}' or email '{email}' already exists")

    current_app.logger.info("User created: %s (%s)", user.username, user.role)
    click.echo(f"Created {role} user {user.username} ({user.id})")
