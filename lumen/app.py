"""
Lumen Studio Application
========================

Run with:
    flask --app lumen.app run

Create the first admin:
    flask --app lumen.app create-admin --name "Studio Owner" --email owner@example.com

Visit:
    http://localhost:5000/admin        - Admin panel
    http://localhost:5000/admin/login  - Admin login
    http://localhost:5000/health       - Health check
"""

import click
from flask import Flask

from . import Lumen
from .core.config import Config
from .core.errors import AdminError, ValidationError
from .core.logging_service import LoggingService
from .modules.auth.database import ADMIN_ROLE
from .modules.auth.routes import create_account_from


def create_app(test_config=None, lumen_config=None):
    """Application factory"""
    app = Flask(__name__)
    if test_config:
        app.config.update(test_config)

    Lumen(app, lumen_config)
    register_commands(app)
    return app


def register_commands(app):
    @app.cli.command('create-admin')
    @click.option('--name', prompt=True, help='Display name of the admin')
    @click.option('--email', prompt=True, help='Sign-in email')
    @click.password_option(help='Sign-in password')
    def create_admin_command(name, email, password):
        """Create an admin account."""
        try:
            account = create_account_from(
                {'name': name, 'email': email, 'password': password}, ADMIN_ROLE
            )
        except ValidationError as e:
            raise click.BadParameter(e.message, param_hint=e.field)
        except AdminError as e:
            raise click.ClickException(e.message)

        LoggingService.log_user_action('auth', 'create-admin (cli)', details={'email': account.email})
        click.echo(f"Admin {account.email} created successfully")

    @app.cli.command('cleanup-logs')
    @click.option('--days', default=None, type=int, help='Keep entries newer than this many days')
    def cleanup_logs_command(days):
        """Delete old app_logs entries."""
        days = days if days is not None else app.config.get('LOG_RETENTION_DAYS', 30)
        deleted = LoggingService.cleanup_old_logs(days_to_keep=days)
        click.echo(f"Deleted {deleted} log entries older than {days} days")


if __name__ == '__main__':
    app = create_app()

    print("\n" + "=" * 60)
    print(f"{Config.BRAND_NAME} Admin")
    print("=" * 60)
    print(f"Admin Panel:     http://localhost:{Config.port}/admin")
    print(f"Admin Login:     http://localhost:{Config.port}/admin/login")
    print(f"Health:          http://localhost:{Config.port}/health")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=True)
