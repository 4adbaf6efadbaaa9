"""Tests for the CLI commands and settings."""
import pytest
import typer
from typer.testing import CliRunner

from conftest import FakeProvider, ok
from pyagenda.cli import app as cli_app
from pyagenda.cli.providers import ClientSettings, get_provider, load_settings
from pyagenda.llm import AzureCompletionProvider, OpenAICompatibleProvider
from pyagenda.llm.models import MalformedResponse, TransportError

runner = CliRunner()

_ENV_VARS = [
    "LLM_PROVIDER",
    "AZURE_OPENAI_API_KEY",
    "AZURE_OPENAI_ENDPOINT",
    "AZURE_OPENAI_DEPLOYMENT",
    "AZURE_OPENAI_API_VERSION",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_CHAT_MODEL",
    "PYAGENDA_TEMPERATURE",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove client settings from the environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def fake_provider(monkeypatch):
    """Install a scripted provider in place of the configured one."""
    def install(*results):
        provider = FakeProvider(results)
        monkeypatch.setattr(cli_app, "get_provider", lambda console=None: provider)
        return provider
    return install


class TestSettings:
    """Tests for reading client settings."""

    def test_defaults(self, clean_env):
        """Test defaults when nothing is configured."""
        settings = load_settings()

        assert settings.provider == "azure"
        assert settings.azure_api_key is None
        assert settings.azure_endpoint == "https://taskmgrpoc.openai.azure.com"
        assert settings.azure_deployment == "gpt-4"
        assert settings.azure_api_version == "2025-01-01-preview"
        assert settings.temperature == 0.7

    def test_from_environment(self, clean_env):
        """Test that environment variables override defaults."""
        clean_env.setenv("LLM_PROVIDER", "OpenAI")
        clean_env.setenv("OPENAI_API_KEY", "sk-test")
        clean_env.setenv("OPENAI_CHAT_MODEL", "gpt-4o")
        clean_env.setenv("PYAGENDA_TEMPERATURE", "0.2")

        settings = load_settings()

        assert settings.provider == "openai"
        assert settings.openai_api_key == "sk-test"
        assert settings.openai_model == "gpt-4o"
        assert settings.temperature == 0.2

    def test_temperature_out_of_range_fails(self):
        """Test that temperature is validated."""
        with pytest.raises(ValueError):
            ClientSettings(temperature=5.0)

    def test_get_provider_azure(self):
        """Test that a missing key still yields a provider."""
        provider = get_provider(ClientSettings(provider="azure"))

        assert isinstance(provider, AzureCompletionProvider)
        assert not provider.has_credential

    def test_get_provider_openai(self):
        """Test creating the OpenAI-compatible provider from settings."""
        provider = get_provider(ClientSettings(provider="openai", openai_api_key="sk"))

        assert isinstance(provider, OpenAICompatibleProvider)
        assert provider.has_credential

    def test_get_provider_unknown_exits(self):
        """Test that an unknown provider name exits with an error."""
        with pytest.raises(typer.Exit):
            get_provider(ClientSettings(provider="nope"))


class TestAskCommand:
    """Tests for the ask command."""

    def test_prints_reply(self, fake_provider):
        """Test that the reply is printed."""
        provider = fake_provider(ok("Let's define your quarterly goals."))

        result = runner.invoke(cli_app.app, ["ask", "Plan my week"])

        assert result.exit_code == 0
        assert "quarterly goals" in result.output
        assert provider.closed
        assert provider.calls[0][-1].content == "Plan my week"

    def test_reply_html_sanitized(self, fake_provider):
        """Test that markup in a reply is sanitized before printing."""
        fake_provider(ok("Hi <script>steal()</script> there <b>today</b>"))

        result = runner.invoke(cli_app.app, ["ask", "A"])

        assert result.exit_code == 0
        assert "steal()" not in result.output
        assert "<b>" not in result.output
        assert "Hi" in result.output
        assert "today" in result.output

    def test_degraded_reply_printed(self, fake_provider):
        """Test that the fallback reply is printed like any other."""
        fake_provider(MalformedResponse(reason="choices: Field required"))

        result = runner.invoke(cli_app.app, ["ask", "A"])

        assert result.exit_code == 0
        assert "Hmm, something went wrong." in result.output

    def test_failure_exits_nonzero(self, fake_provider):
        """Test that a failed request exits with code 1."""
        fake_provider(TransportError(reason="HTTP 500: boom"))

        result = runner.invoke(cli_app.app, ["ask", "A"])

        assert result.exit_code == 1
        assert "HTTP 500" in result.output

    def test_blank_text_exits_nonzero(self, fake_provider):
        """Test that blank text is rejected without a request."""
        provider = fake_provider()

        result = runner.invoke(cli_app.app, ["ask", "   "])

        assert result.exit_code == 1
        assert provider.calls == []


class TestChatCommand:
    """Tests for the line-mode chat command."""

    def test_chat_round_trip(self, fake_provider):
        """Test one exchange followed by exit."""
        provider = fake_provider(ok("Noted."))

        result = runner.invoke(cli_app.app, ["chat"], input="Plan my week\nquit\n")

        assert result.exit_code == 0
        assert "Noted." in result.output
        assert "Goodbye" in result.output
        assert len(provider.calls) == 1
        assert provider.closed

    def test_chat_failure_keeps_going(self, fake_provider):
        """Test that a failed exchange reports and continues."""
        provider = fake_provider(TransportError(reason="down"), ok("Back."))

        result = runner.invoke(cli_app.app, ["chat"], input="A\nB\nq\n")

        assert result.exit_code == 0
        assert "No reply" in result.output
        assert "Back." in result.output
        assert [m.content for m in provider.calls[1]][1:] == ["A", "B"]

    def test_chat_reply_html_sanitized(self, fake_provider):
        """Test that line-mode replies go through the same sanitizer."""
        fake_provider(ok("<script>steal()</script>Done."))

        result = runner.invoke(cli_app.app, ["chat"], input="A\nq\n")

        assert result.exit_code == 0
        assert "steal()" not in result.output
        assert "Done." in result.output
