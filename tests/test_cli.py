"""
Unit tests for the command line interface and configuration

Tests:
- extract / extract-all commands
- build command
- config-api command
- ApiConfig / AppConfig environment loading
"""

import json

import pytest
from click.testing import CliRunner

from config import ApiConfig, AppConfig
from main import cli


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def runner():
    """Click test runner"""
    return CliRunner()


@pytest.fixture
def issue_file(tmp_path):
    """Single issue response on disk"""
    path = tmp_path / "issue.json"
    path.write_text(
        json.dumps(
            {
                "key": "KP-1",
                "fields": {
                    "customfield_10045": {
                        "id": "10054",
                        "value": "America",
                        "child": {"id": "10057", "value": "Costa Rica"},
                    },
                    "customfield_10046": None,
                },
            }
        )
    )
    return path


@pytest.fixture
def search_file(tmp_path):
    """Search response on disk"""
    path = tmp_path / "search.json"
    path.write_text(
        json.dumps(
            {
                "issues": [
                    {"key": "KP-1", "fields": {"customfield_10042": 1.5}},
                    {"key": "KP-2", "fields": {"customfield_10042": None}},
                ]
            }
        )
    )
    return path


# ============================================================================
# TEST: extract
# ============================================================================


class TestExtractCommands:
    """Tests for extract and extract-all"""

    def test_extract_shape(self, runner, issue_file):
        """Test shape-specific extraction prints JSON with wire names"""
        result = runner.invoke(cli, ["extract", str(issue_file), "customfield_10045", "--shape", "cascading"])

        assert result.exit_code == 0
        assert '"Costa Rica"' in result.output
        assert '"child"' in result.output

    def test_extract_raw_default(self, runner, issue_file):
        """Test generic extraction without a shape"""
        result = runner.invoke(cli, ["extract", str(issue_file), "customfield_10045"])

        assert result.exit_code == 0
        assert '"America"' in result.output

    def test_extract_missing_value_exits_1(self, runner, issue_file):
        """Test extraction errors exit with status 1"""
        result = runner.invoke(cli, ["extract", str(issue_file), "customfield_10046"])

        assert result.exit_code == 1

    def test_extract_empty_shape(self, runner, issue_file):
        """Test empty-on-null shapes print an empty list"""
        result = runner.invoke(cli, ["extract", str(issue_file), "customfield_10046", "--shape", "multi-select"])

        assert result.exit_code == 0
        assert "[]" in result.output

    def test_extract_all(self, runner, search_file):
        """Test collection extraction keyed by issue key"""
        result = runner.invoke(cli, ["extract-all", str(search_file), "customfield_10042", "--shape", "float"])

        assert result.exit_code == 0
        assert '"KP-1": 1.5' in result.output
        assert "KP-2" not in result.output

    def test_shape_uses_configured_layout(self, runner, tmp_path, monkeypatch):
        """Test container, records and key settings apply to shape parsers"""
        from config import app_config

        monkeypatch.setattr(app_config, "container", "requestFieldValues")
        monkeypatch.setattr(app_config, "records", "values")
        monkeypatch.setattr(app_config, "record_key", "issueKey")
        single = tmp_path / "request.json"
        single.write_text(json.dumps({"requestFieldValues": {"summary": "Help"}}))
        collection = tmp_path / "requests.json"
        collection.write_text(
            json.dumps({"values": [{"issueKey": "SD-1", "requestFieldValues": {"summary": "Help"}}]})
        )

        raw = runner.invoke(cli, ["extract", str(single), "summary"])
        shaped = runner.invoke(cli, ["extract", str(single), "summary", "--shape", "string"])
        shaped_all = runner.invoke(cli, ["extract-all", str(collection), "summary", "--shape", "string"])

        assert raw.exit_code == 0
        assert shaped.exit_code == 0
        assert '"Help"' in shaped.output
        assert shaped_all.exit_code == 0
        assert '"SD-1": "Help"' in shaped_all.output

    def test_extract_all_without_records(self, runner, issue_file):
        """Test single issue buffer fails collection extraction"""
        result = runner.invoke(cli, ["extract-all", str(issue_file), "customfield_10045"])

        assert result.exit_code == 1


# ============================================================================
# TEST: build
# ============================================================================


class TestBuildCommand:
    """Tests for payload building"""

    def test_build_with_entity(self, runner, tmp_path):
        """Test custom fields are merged into the entity file"""
        entity = tmp_path / "entity.json"
        entity.write_text(json.dumps({"fields": {"summary": "New issue"}}))
        output = tmp_path / "out" / "payload.json"

        result = runner.invoke(
            cli,
            [
                "build",
                "--entity", str(entity),
                "--text", "customfield_10000=Hello",
                "--number", "customfield_10042=1000.3232",
                "--multi-select", "customfield_10046=Option 1,Option 3",
                "--select", "customfield_10044=Option 1",
                "--user", "customfield_10053=5b10ac8d82e05b22cc7d4ef5",
                "--output", str(output),
            ],
        )

        assert result.exit_code == 0
        payload = json.loads(output.read_text())
        assert payload["fields"]["summary"] == "New issue"
        assert payload["fields"]["customfield_10042"] == 1000.3232
        assert payload["fields"]["customfield_10046"] == [{"value": "Option 1"}, {"value": "Option 3"}]
        assert payload["fields"]["customfield_10053"] == {"accountId": "5b10ac8d82e05b22cc7d4ef5"}

    def test_build_to_stdout(self, runner):
        """Test payload is printed without --output"""
        result = runner.invoke(cli, ["build", "--number", "f1=1000.3232"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"fields": {"f1": 1000.3232}}

    def test_build_empty_value_exits_1(self, runner):
        """Test builder errors exit with status 1"""
        result = runner.invoke(cli, ["build", "--text", "customfield_10000="])

        assert result.exit_code == 1

    def test_build_invalid_number(self, runner):
        """Test non-numeric number exits with status 1"""
        result = runner.invoke(cli, ["build", "--number", "customfield_10042=abc"])

        assert result.exit_code == 1

    def test_build_bad_assignment(self, runner):
        """Test options without ID=VALUE are usage errors"""
        result = runner.invoke(cli, ["build", "--text", "customfield_10000"])

        assert result.exit_code == 2


# ============================================================================
# TEST: Configuration
# ============================================================================


class TestConfiguration:
    """Tests for environment configuration"""

    def test_api_config_from_env(self, monkeypatch):
        """Test API settings are read from the environment"""
        monkeypatch.setenv("FIELDKIT_API_URL", "https://example.atlassian.net")
        monkeypatch.setenv("FIELDKIT_API_TOKEN", "token")
        monkeypatch.setenv("FIELDKIT_API_USER", "me@example.com")
        monkeypatch.setenv("FIELDKIT_TIMEOUT", "12.5")

        config = ApiConfig.from_env()

        assert config.base_url == "https://example.atlassian.net"
        assert config.api_token == "token"
        assert config.api_user == "me@example.com"
        assert config.timeout == 12.5

    def test_invalid_timeout(self, monkeypatch):
        """Test non-numeric timeout is rejected"""
        monkeypatch.setenv("FIELDKIT_TIMEOUT", "soon")

        with pytest.raises(ValueError):
            ApiConfig.from_env()

    def test_app_config_defaults(self, monkeypatch):
        """Test application defaults"""
        monkeypatch.delenv("FIELDKIT_OUTPUT_DIR", raising=False)
        monkeypatch.delenv("FIELDKIT_TIMEOUT", raising=False)

        config = AppConfig.from_env()

        assert config.output_dir == "./output"
        assert config.container == "fields"
        assert config.records == "issues"
        assert config.api is not None

    def test_config_api_command(self, runner):
        """Test config-api stores the prompted values"""
        from config import app_config

        result = runner.invoke(
            cli,
            ["config-api"],
            input="https://example.atlassian.net\nme@example.com\nsecret\n",
        )

        assert result.exit_code == 0
        assert app_config.api.base_url == "https://example.atlassian.net"
        assert app_config.api.api_user == "me@example.com"
        assert app_config.api.api_token == "secret"
