from typing import Optional

import click

from version_check.checker import installed_version


def parse_package_spec(spec: str) -> tuple[str, Optional[str]]:
    """Split ``name==version`` into its parts.

    A bare ``name`` falls back to the version installed in this environment.
    """
    name, sep, version = spec.partition("==")
    name = name.strip()
    if sep:
        return name, version.strip() or None
    return name, installed_version(name) if name else None


def echo_err(message):
    click.secho(f'\n❌  {message}\n', fg='red', bold=True)


def echo_success(message):
    click.secho(f'\n✅  {message}', fg='green', bold=True)


def echo_warning(message):
    click.secho(f'\n⚠️  {message}', fg='yellow')


def echo_info(message):
    click.secho(message, fg='blue')
