"""Tests for the command-line entry point."""

import io
from unittest.mock import patch

import pytest

from coding_agent import main as main_module
from coding_agent.clients.anthropic import AnthropicResponse, InferenceError
from coding_agent.models.llm import TextBlock


class FakeClient:
    def __init__(self, settings, outcome):
        self.settings = settings
        self.outcome = outcome

    def create_message(self, messages, tools=None):
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class TestMain:
    """Tests for startup and fatal error handling."""

    def test_missing_credential_exits(self, monkeypatch, capsys):
        """Test that a missing API key aborts with a diagnostic."""
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        with pytest.raises(SystemExit) as exc_info:
            main_module.main()

        assert exc_info.value.code == 1
        assert "ANTHROPIC_API_KEY environment variable not set." in capsys.readouterr().out

    @pytest.mark.parametrize(
        ("value", "message"),
        [("abc", "AGENT_MAX_TOKENS must be an integer"), ("0", "invalid settings: max_tokens")],
    )
    def test_invalid_settings_exit(self, monkeypatch, capsys, value, message):
        """Test that a bad setting aborts with one diagnostic line instead of a traceback."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
        monkeypatch.setenv("AGENT_MAX_TOKENS", value)

        with pytest.raises(SystemExit) as exc_info:
            main_module.main()

        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert message in out
        assert "Traceback" not in out

    def test_end_of_input_exits_cleanly(self, monkeypatch, capsys):
        """Test a session that ends at end of input."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
        monkeypatch.setattr("sys.stdin", io.StringIO("hello\n"))
        reply = AnthropicResponse(content=[TextBlock(text="Hi there")], stop_reason="end_turn", model="claude-test")

        with patch.object(main_module, "AnthropicClient", lambda settings: FakeClient(settings, reply)):
            main_module.main()

        out = capsys.readouterr().out
        assert "Chat with Claude (use 'ctrl-c' to quit)" in out
        assert "Claude: Hi there" in out

    def test_inference_error_exits(self, monkeypatch, capsys):
        """Test that an inference failure aborts the run."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
        monkeypatch.setattr("sys.stdin", io.StringIO("hello\n"))
        failure = InferenceError("error running inference: Connection error.")

        with patch.object(main_module, "AnthropicClient", lambda settings: FakeClient(settings, failure)):
            with pytest.raises(SystemExit) as exc_info:
                main_module.main()

        assert exc_info.value.code == 1
        assert "Agent exited with error" in capsys.readouterr().out
