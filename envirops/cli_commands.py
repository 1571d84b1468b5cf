"""
Flask CLI commands.

Commands:
- flask init-db: create the tables
- flask create-user: create a staff user
- flask seed-services: load the starter service catalog
"""

import click

from envirops.database import db_session, create_all
from envirops.exceptions import EnviropsError
from envirops.forms import UserForm, validate_payload
from envirops.services import catalog_service, user_service


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('init-db')
    def init_db_command():
        """Create every table."""
        create_all()
        click.echo(click.style('Tablas creadas.', fg='green'))

    @app.cli.command('create-user')
    @click.option('--name', prompt=True, help='Full name')
    @click.option('--email', prompt=True, help='Email address')
    @click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password')
    @click.option('--role', default='gestor', show_default=True, help='Role')
    @click.option('--position', default=None, help='Position')
    @click.option('--department', default=None, help='Department')
    def create_user_command(name, email, password, role, position, department):
        """Create a staff user (gestor)."""
        payload = {
            'name': name, 'email': email, 'password': password,
            'role': role, 'position': position, 'department': department,
        }
        try:
            data = validate_payload(UserForm, payload)
            user = user_service.create_user(data, db_session)
        except EnviropsError as e:
            details = getattr(e, 'errors', None)
            click.echo(click.style(f'Error al crear usuario: {e.message} {details or ""}', fg='red'))
            raise click.exceptions.Exit(1)

        click.echo(click.style('Usuario creado exitosamente.', fg='green', bold=True))
        click.echo(f'   Email: {user.email}')
        click.echo(f'   ID: {user.id}')

    @app.cli.command('seed-services')
    def seed_services_command():
        """Load the starter service catalog (existing codes are skipped)."""
        created = catalog_service.seed_services(db_session)
        click.echo(click.style(f'{created} servicios creados.', fg='green'))
