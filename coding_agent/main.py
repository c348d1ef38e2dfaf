"""Command-line entry point."""

import sys

from coding_agent.cli.console import ConsoleChat
from coding_agent.clients.anthropic import AnthropicClient, InferenceError
from coding_agent.config import AgentSettings, SettingsError
from coding_agent.services.agent import Agent
from coding_agent.tools.registry import ToolsRegistry, get_default_tools
from coding_agent.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> None:
    """Start an interactive chat session on stdin/stdout."""
    setup_logging()
    chat = ConsoleChat()

    try:
        settings = AgentSettings.from_env()
    except SettingsError as e:
        chat.error(str(e))
        sys.exit(1)

    agent = Agent(
        client=AnthropicClient(settings),
        get_user_message=chat.read_user_message,
        registry=ToolsRegistry(get_default_tools()),
        on_event=chat.render,
    )

    chat.show_banner()
    try:
        agent.run()
    except InferenceError as e:
        logger.debug("Inference failed", exc_info=True)
        chat.error(f"Agent exited with error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        chat.console.print()


if __name__ == "__main__":
    main()
