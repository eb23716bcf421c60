import asyncio
import logging
import sys

import click
import questionary

from version_check.checker import check_and_report, check_versions, installed_version, to_query
from version_check.config import Config
from version_check.formatter import Notice, Severity, format_outcome
from version_check.registry import DEFAULT_REGISTRY_URL, RegistryClient
from version_check.utils import echo_err, echo_info, echo_success, echo_warning, parse_package_spec

_REGISTRY_OPTIONS = {
    "Hex (hex.pm)": DEFAULT_REGISTRY_URL,
    "Custom URL": None,
}


@click.group()
@click.option("--verbose", is_flag=True, help="Log debug output.")
def cli(verbose: bool):
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def _show(notice: Notice, package_name: str):
    if notice.severity == Severity.WARNING:
        echo_warning(notice.message)
    elif notice.severity == Severity.DEBUG:
        echo_success(notice.message)
    elif notice.severity == Severity.ERROR:
        echo_err(notice.message)
    else:
        echo_info(f"No releases of {package_name} found.")


def _set_registry_url(config: Config):
    default_choice = next(
        (k for k, v in _REGISTRY_OPTIONS.items() if v == config.registry_url),
        "Custom URL",
    )
    try:
        user_selection = questionary.select(
            "Which registry should versions be checked against?",
            choices=list(_REGISTRY_OPTIONS.keys()),
            default=default_choice,
        ).ask()
    except (KeyError, KeyboardInterrupt, TypeError):
        return

    if url := _REGISTRY_OPTIONS.get(user_selection):
        config.registry_url = url
    elif user_selection is not None:
        config.registry_url = click.prompt("Registry packages URL", default=config.registry_url)


def _set_config() -> Config:
    config = Config.load_or_default()

    _set_registry_url(config)

    config.timeout = click.prompt(
        "Request timeout in seconds",
        type=click.FloatRange(min=0, min_open=True),
        default=config.timeout,
    )
    config.max_concurrency = click.prompt(
        "Maximum concurrent registry requests",
        type=click.IntRange(min=1),
        default=config.max_concurrency,
    )
    config.trust_publication_order = click.confirm(
        "Treat the last published release as the latest one? (Hex lists newest first, so answer no for Hex)",
        default=config.trust_publication_order,
    )

    config.save()
    click.echo("Configuration saved!")

    return config


@cli.command()
def setup():
    """Configure the registry used for version checks."""
    _set_config()


@cli.command()
@click.argument("package")
@click.option("--current", help="Installed version. Defaults to the version installed here.")
@click.option(
    "--publication-order/--semantic-order",
    default=None,
    help="Take the last published release as the latest, or the highest version. Defaults to the config.",
)
def check(package: str, current, publication_order):
    """Check whether PACKAGE has a newer release."""
    config = Config.load_or_default()
    notice = check_and_report(
        package,
        current or installed_version(package),
        RegistryClient(config.registry_url, config.timeout),
        config.trust_publication_order if publication_order is None else publication_order,
    )
    _show(notice, package)
    if notice.severity == Severity.ERROR:
        sys.exit(1)


@cli.command()
@click.argument("specs", nargs=-1, required=True)
def check_many(specs: tuple[str, ...]):
    """Check several packages at once, given as NAME==VERSION or NAME."""
    config = Config.load_or_default()
    queries = [to_query(*parse_package_spec(spec)) for spec in specs]
    for package_name, outcome in asyncio.run(check_versions(queries, config)):
        _show(format_outcome(outcome, package_name), package_name)


if __name__ == '__main__':
    cli()
