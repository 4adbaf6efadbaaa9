"""Tests for prompt loading."""
import pytest

from pyagenda.prompts import clear_cache, get_system_directive, load_prompt


@pytest.fixture(autouse=True)
def fresh_cache():
    """Reset the prompt cache around each test."""
    clear_cache()
    yield
    clear_cache()


class TestPrompts:
    """Tests for prompt lookup."""

    def test_packaged_directive(self):
        """Test that the packaged directive describes the assistant."""
        directive = get_system_directive()

        assert directive.startswith("You are a proactive and structured Task & Goal")
        assert "completion dates" in directive

    def test_working_directory_override(self, tmp_path, monkeypatch):
        """Test that ./prompts/system.txt takes precedence."""
        (tmp_path / "prompts").mkdir()
        (tmp_path / "prompts" / "system.txt").write_text("Custom directive", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert get_system_directive() == "Custom directive"

    def test_missing_prompt(self, tmp_path, monkeypatch):
        """Test that an unknown prompt name raises."""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(FileNotFoundError):
            load_prompt("does-not-exist")
