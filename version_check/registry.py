import asyncio
import logging
import platform
import re
from collections.abc import Mapping
from typing import Any, Optional, Union

import aiohttp
import requests

from version_check.versions import ParseError, Version, parse

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL = "https://hex.pm/api/packages"
DEFAULT_TIMEOUT = 5.0
ACCEPT = "application/json"


class RegistryError(Exception):
    """Base class for registry lookup failures."""


class NetworkError(RegistryError):
    """The registry could not be reached or answered with an error status."""


class DecodeError(RegistryError):
    """The registry answered with a body that is not a JSON object."""


def package_url(base_url: str, package_name: str) -> str:
    return f"{base_url.rstrip('/')}/{package_name}"


def user_agent(package_name: str, current_version: Union[Version, str, None]) -> str:
    """Identification header for a registry request.

    ``my_app`` at ``1.0.0`` becomes ``MyApp/1.0.0 (Python/3.12.1) (Linux/6.1.0)``.
    """
    name = "".join(part.capitalize() for part in re.split(r"[_-]", package_name))
    return (
        f"{name}/{'' if current_version is None else current_version} "
        f"(Python/{platform.python_version()}) "
        f"({platform.system()}/{platform.release()})"
    )


def request_headers(package_name: str, current_version: Union[Version, str, None]) -> dict:
    return {
        "User-Agent": user_agent(package_name, current_version),
        "Accept": ACCEPT,
    }


def _as_document(package_name: str, document: Any) -> dict:
    if not isinstance(document, Mapping):
        raise DecodeError(f"Expected an object for {package_name}, got {type(document).__name__}")
    return dict(document)


def releases_from_document(document: Any) -> list[Version]:
    """Pull the release versions out of a decoded registry document.

    Releases keep the order the registry reported them in. Entries without a
    usable ``version`` are dropped instead of failing the whole lookup.
    """
    if not isinstance(document, Mapping):
        return []

    releases = document.get("releases")
    if not isinstance(releases, list):
        return []

    versions = []
    for release in releases:
        if not isinstance(release, Mapping):
            continue
        try:
            versions.append(parse(release.get("version")))
        except ParseError as e:
            logger.debug(f"Skipping release: {e}")

    return versions


class RegistryClient:
    """Looks up the published releases of a package with ``requests``."""

    def __init__(
        self,
        base_url: str = DEFAULT_REGISTRY_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.session = session

    def package_url(self, package_name: str) -> str:
        return package_url(self.base_url, package_name)

    def fetch(self, package_name: str, current_version: Union[Version, str, None] = None) -> dict:
        """Fetch the raw package document.

        :raises NetworkError: on transport failures and non-2xx responses.
        :raises DecodeError: when the body is not a JSON object.
        """
        http_client = self.session or requests
        try:
            response = http_client.get(
                self.package_url(package_name),
                headers=request_headers(package_name, current_version),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(f"Could not fetch {package_name} from {self.base_url}: {e}") from e

        try:
            document = response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid response body for {package_name}: {e}") from e

        return _as_document(package_name, document)

    def fetch_releases(
        self, package_name: str, current_version: Union[Version, str, None] = None
    ) -> list[Version]:
        """Releases of ``package_name`` in registry order, ``[]`` on any failure."""
        try:
            document = self.fetch(package_name, current_version)
        except RegistryError as e:
            logger.warning(f"Version check failed: {e}")
            return []

        return releases_from_document(document)


class AsyncRegistryClient:
    """``aiohttp`` counterpart of :class:`RegistryClient` for concurrent checks."""

    def __init__(self, base_url: str = DEFAULT_REGISTRY_URL, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url
        self.timeout = timeout

    def package_url(self, package_name: str) -> str:
        return package_url(self.base_url, package_name)

    async def fetch(
        self,
        http_client: aiohttp.ClientSession,
        package_name: str,
        current_version: Union[Version, str, None] = None,
    ) -> dict:
        try:
            response = await http_client.request(
                "GET",
                self.package_url(package_name),
                headers=request_headers(package_name, current_version),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
            response.raise_for_status()
            try:
                document = await response.json(content_type=None)
            except ValueError as e:
                raise DecodeError(f"Invalid response body for {package_name}: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"Could not fetch {package_name} from {self.base_url}: {e}") from e

        return _as_document(package_name, document)

    async def fetch_releases(
        self,
        http_client: aiohttp.ClientSession,
        package_name: str,
        current_version: Union[Version, str, None] = None,
    ) -> list[Version]:
        try:
            document = await self.fetch(http_client, package_name, current_version)
        except RegistryError as e:
            logger.warning(f"Version check failed: {e}")
            return []

        return releases_from_document(document)

