"""
Management commands for the marketing calendar.

Users have no self-service registration; provision them here.
"""

import click

from database import Settings, build_engine, build_session_factory, init_db
from models import ROLES, ROLE_USER
from security import SessionManager
from errors import ValidationError


@click.group()
@click.option('--database-url', envvar='DATABASE_URL', help='Override DATABASE_URL')
@click.pass_context
def cli(ctx, database_url):
    """Marketing calendar administration"""
    settings = Settings(DATABASE_URL=database_url) if database_url else Settings()
    ctx.obj = build_engine(settings)


@cli.command('init-db')
@click.pass_obj
def init_db_command(engine):
    """Create the database tables"""
    init_db(engine)
    click.echo("Tables created")


@cli.command('create-user')
@click.argument('email')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
@click.option('--role', type=click.Choice(ROLES), default=ROLE_USER, show_default=True)
@click.option('--inactive', is_flag=True, help='Create the account disabled')
@click.pass_obj
def create_user(engine, email, password, role, inactive):
    """Provision a user who can log in to the calendar"""
    init_db(engine)
    sessions = SessionManager(build_session_factory(engine))
    try:
        user = sessions.create_user(email, password, role=role, active=not inactive)
    except ValidationError as e:
        raise click.ClickException(e.message)
    click.echo(f"Created user {user.id} <{user.email}> with role {user.role}")


if __name__ == '__main__':
    cli()
