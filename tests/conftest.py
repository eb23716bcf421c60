"""
Pytest fixtures for version-check tests.
"""

from unittest.mock import MagicMock

import pytest

from version_check.versions import parse


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temporary directory for every test."""
    config_path = tmp_path / "config.ini"
    monkeypatch.setattr("version_check.config._CONFIG_PATH", config_path)
    monkeypatch.delenv("VERSION_CHECK_REGISTRY_URL", raising=False)
    return config_path


@pytest.fixture
def versions():
    """Parse a list of version strings."""
    def _versions(*texts):
        return [parse(text) for text in texts]
    return _versions


@pytest.fixture
def registry_response():
    """Build a mocked requests response carrying ``payload`` as JSON."""
    def _response(payload, status_error=None):
        response = MagicMock()
        response.json.return_value = payload
        if status_error is not None:
            response.raise_for_status.side_effect = status_error
        return response
    return _response


@pytest.fixture
def hex_document():
    return {
        "name": "yggdrasil",
        "releases": [
            {"version": "2.0.6", "url": "https://hex.pm/api/packages/yggdrasil/releases/2.0.6"},
            {"version": "2.0.7", "url": "https://hex.pm/api/packages/yggdrasil/releases/2.0.7"},
            {"version": "2.0.8-rc.1", "url": "https://hex.pm/api/packages/yggdrasil/releases/2.0.8-rc.1"},
            {"version": "2.0.8", "url": "https://hex.pm/api/packages/yggdrasil/releases/2.0.8"},
        ],
    }
