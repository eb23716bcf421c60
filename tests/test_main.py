"""
Tests for the click command line interface.
"""

from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner

from version_check.config import Config
from version_check.decision import UpdateOutcome
from version_check.main import cli
from version_check.versions import parse
from version_check.utils import parse_package_spec


def _registry(*texts):
    client = MagicMock()
    client.fetch_releases.return_value = [parse(text) for text in texts]
    return client


class TestCheckCommand:
    """Tests for `version-check check`."""

    def test_reports_new_version(self):
        with patch("version_check.main.RegistryClient", return_value=_registry("2.0.7", "2.0.8")):
            result = CliRunner().invoke(cli, ["check", "yggdrasil", "--current", "2.0.7"])

        assert result.exit_code == 0
        assert "A new yggdrasil version is available (2.0.8 > 2.0.7)" in result.output

    def test_reports_latest_version(self):
        with patch("version_check.main.RegistryClient", return_value=_registry("2.0.8")):
            result = CliRunner().invoke(cli, ["check", "yggdrasil", "--current", "2.0.8"])

        assert result.exit_code == 0
        assert "Using the latest version of yggdrasil (2.0.8)" in result.output

    def test_not_found(self):
        with patch("version_check.main.RegistryClient", return_value=_registry()):
            result = CliRunner().invoke(cli, ["check", "ghost", "--current", "1.0.0"])

        assert result.exit_code == 0
        assert "No releases of ghost found." in result.output

    def test_falls_back_to_installed_version(self):
        client = _registry("1.0.0", "1.1.0")
        with patch("version_check.main.RegistryClient", return_value=client):
            with patch("version_check.main.installed_version", return_value="1.1.0") as installed:
                result = CliRunner().invoke(cli, ["check", "plug"])

        installed.assert_called_once_with("plug")
        assert "Using the latest version of plug (1.1.0)" in result.output

    def test_unknown_version_exits_with_error(self):
        with patch("version_check.main.installed_version", return_value=None):
            result = CliRunner().invoke(cli, ["check", "plug"])

        assert result.exit_code == 1
        assert "No application defined for version check" in result.output

    def test_semantic_order_flag(self):
        client = _registry("1.0.0", "3.0.0", "2.0.0")
        with patch("version_check.main.RegistryClient", return_value=client):
            result = CliRunner().invoke(cli, ["check", "plug", "--current", "1.0.0", "--semantic-order"])

        assert "(3.0.0 > 1.0.0)" in result.output

    def test_highest_version_by_default(self):
        client = _registry("3.0.0", "2.0.0", "1.0.0")
        with patch("version_check.main.RegistryClient", return_value=client):
            result = CliRunner().invoke(cli, ["check", "plug", "--current", "1.0.0"])

        assert "(3.0.0 > 1.0.0)" in result.output

    def test_publication_order_flag(self):
        client = _registry("1.0.0", "3.0.0", "2.0.0")
        with patch("version_check.main.RegistryClient", return_value=client):
            result = CliRunner().invoke(cli, ["check", "plug", "--current", "1.0.0", "--publication-order"])

        assert "(2.0.0 > 1.0.0)" in result.output

    def test_uses_configured_registry(self):
        Config(registry_url="http://localhost:4000/api/packages", timeout=1.5).save()

        with patch("version_check.main.RegistryClient", return_value=_registry()) as client_cls:
            CliRunner().invoke(cli, ["check", "plug", "--current", "1.0.0"])

        client_cls.assert_called_once_with("http://localhost:4000/api/packages", 1.5)


class TestCheckManyCommand:
    """Tests for `version-check check-many`."""

    def test_prints_one_notice_per_package(self):
        results = [
            ("plug", UpdateOutcome.update_available(parse("1.0.0"), parse("1.1.0"))),
            ("ecto", UpdateOutcome.up_to_date(parse("3.0.0"))),
        ]
        check = AsyncMock(return_value=results)
        with patch("version_check.main.check_versions", new=check):
            result = CliRunner().invoke(cli, ["check-many", "plug==1.0.0", "ecto==3.0.0"])

        assert result.exit_code == 0
        queries = check.call_args.args[0]
        assert [q.name for q in queries] == ["plug", "ecto"]
        assert "A new plug version is available (1.1.0 > 1.0.0)" in result.output
        assert "Using the latest version of ecto (3.0.0)" in result.output

    def test_requires_a_package(self):
        result = CliRunner().invoke(cli, ["check-many"])
        assert result.exit_code != 0


class TestSetupCommand:
    """Tests for `version-check setup`."""

    def test_saves_answers(self):
        question = MagicMock()
        question.ask.return_value = "Custom URL"
        with patch("version_check.main.questionary.select", return_value=question):
            result = CliRunner().invoke(
                cli, ["setup"], input="http://localhost:4000/api/packages\n2\n4\nn\n"
            )

        assert result.exit_code == 0, result.output
        assert "Configuration saved!" in result.output
        config = Config.load()
        assert config.registry_url == "http://localhost:4000/api/packages"
        assert config.timeout == 2.0
        assert config.max_concurrency == 4
        assert config.trust_publication_order is False


class TestParsePackageSpec:
    """Tests for parse_package_spec()."""

    def test_name_and_version(self):
        assert parse_package_spec("plug==1.4.0") == ("plug", "1.4.0")

    def test_name_only_uses_installed_version(self):
        with patch("version_check.utils.installed_version", return_value="2.0.0"):
            assert parse_package_spec("plug") == ("plug", "2.0.0")

    def test_empty_version(self):
        assert parse_package_spec("plug==") == ("plug", None)
