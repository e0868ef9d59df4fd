import click

from app.extensions import db
from app.models.enums import UserRole, UserStatus


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables for the current models."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("create-admin")
    @click.option("--email", required=True)
    @click.option("--password", required=True)
    @click.option("--first-name", default="Super")
    @click.option("--last-name", default="Admin")
    def create_admin(email, password, first_name, last_name):
        """Create the first super admin account."""
        from app.models import User

        email = email.strip().lower()
        if User.query.filter_by(email=email).first():
            click.echo(f"User with email '{email}' already exists.")
            return

        user = User(
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=UserRole.SUPER_ADMIN.value,
            status=UserStatus.ACTIVE.value,
        )
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        click.echo(f"Super admin created: {email}")
