"""Entry points a host application calls while starting up.

``check_version`` never raises: registry trouble degrades to a ``NOT_FOUND``
outcome and bad input to ``INVALID_INPUT``, so a failed check cannot stop
the caller from starting.
"""
import asyncio
import logging
from importlib import metadata
from typing import Iterable, Optional, Union

import aiohttp
from tqdm.asyncio import tqdm_asyncio

from version_check._version import __version__
from version_check.config import Config
from version_check.decision import PackageQuery, UpdateOutcome, decide
from version_check.formatter import Notice, emit, format_outcome
from version_check.registry import AsyncRegistryClient, RegistryClient
from version_check.versions import ParseError, Version, parse

logger = logging.getLogger(__name__)

PACKAGE_NAME = "version_check"


def installed_version(package_name: str) -> Optional[str]:
    """Version of the installed distribution named ``package_name``, if any."""
    try:
        return metadata.version(package_name)
    except metadata.PackageNotFoundError:
        return None


def to_query(package_name: str, current_version: Union[Version, str, None]) -> PackageQuery:
    if isinstance(current_version, str):
        try:
            current_version = parse(current_version)
        except ParseError as e:
            logger.debug(f"Ignoring current version of {package_name}: {e}")
            current_version = None

    return PackageQuery(name=package_name, current=current_version)


def check_version(
    package_name: str,
    current_version: Union[Version, str, None],
    client: Optional[RegistryClient] = None,
    trust_publication_order: bool = False,
) -> UpdateOutcome:
    query = to_query(package_name, current_version)
    if not query.name or query.current is None:
        return UpdateOutcome.invalid_input()

    client = client or RegistryClient()
    releases = client.fetch_releases(query.name, query.current)
    return decide(releases, query.current, trust_publication_order)


def check_and_report(
    package_name: str,
    current_version: Union[Version, str, None],
    client: Optional[RegistryClient] = None,
    trust_publication_order: bool = False,
) -> Notice:
    outcome = check_version(package_name, current_version, client, trust_publication_order)
    return format_outcome(outcome, package_name)


async def _check_one(
    client: AsyncRegistryClient,
    http_client: aiohttp.ClientSession,
    query: PackageQuery,
    semaphore: asyncio.Semaphore,
    trust_publication_order: bool,
) -> tuple[str, UpdateOutcome]:
    if not query.name or query.current is None:
        return query.name, UpdateOutcome.invalid_input()

    async with semaphore:
        releases = await client.fetch_releases(http_client, query.name, query.current)

    return query.name, decide(releases, query.current, trust_publication_order)


async def check_versions(
    queries: Iterable[PackageQuery], config: Optional[Config] = None
) -> list[tuple[str, UpdateOutcome]]:
    """Check several packages concurrently, one task per package.

    Results come back in the order of ``queries``.
    """
    config = config or Config.load_or_default()
    client = AsyncRegistryClient(config.registry_url, config.timeout)
    semaphore = asyncio.Semaphore(config.max_concurrency)

    async with aiohttp.ClientSession() as http_client:
        tasks = [
            _check_one(client, http_client, query, semaphore, config.trust_publication_order)
            for query in queries
        ]
        if not tasks:
            return []
        return await tqdm_asyncio.gather(
            *tasks, desc="Checking package versions", disable=len(tasks) < 2
        )


def notify_if_outdated(
    package_name: str = PACKAGE_NAME,
    current_version: Union[Version, str, None] = __version__,
    config: Optional[Config] = None,
) -> Notice:
    """Check ``package_name`` and log the resulting notice."""
    config = config or Config.load_or_default()
    notice = check_and_report(
        package_name,
        current_version,
        RegistryClient(config.registry_url, config.timeout),
        config.trust_publication_order,
    )
    emit(notice, logger)
    return notice
