"""Terminal input and rendering for the chat."""

import json
import sys
from typing import TextIO

from rich.console import Console
from rich.markup import escape

from coding_agent.models.events import AgentEvent, AssistantText, ToolCompleted, ToolRequested

QUIT_COMMANDS = frozenset({"/quit", "/exit"})
MAX_RESULT_PREVIEW = 500


class ConsoleChat:
    """Reads user lines from a stream and renders agent events with rich."""

    def __init__(self, console: Console | None = None, stream: TextIO | None = None):
        self.console = console or Console(highlight=False)
        self.stream = stream

    def show_banner(self) -> None:
        self.console.print("Chat with Claude (use 'ctrl-c' to quit)")

    def read_user_message(self) -> str | None:
        """Prompt for one line. Returns None at end of input or on a quit command."""
        self.console.print("[bold blue]You[/bold blue]: ", end="")
        try:
            line = (self.stream or sys.stdin).readline()
        except KeyboardInterrupt:
            self.console.print()
            return None

        if not line:
            self.console.print()
            return None

        text = line.rstrip("\r\n")
        if text.strip().lower() in QUIT_COMMANDS:
            return None
        return text

    def render(self, event: AgentEvent) -> None:
        match event:
            case AssistantText(text=text):
                self.console.print(f"[bold yellow]Claude[/bold yellow]: {escape(text)}")
            case ToolRequested(name=name, input=tool_input):
                arguments = escape(json.dumps(tool_input))
                self.console.print(f"[bold green]tool[/bold green]: requesting {escape(name)}({arguments})")
            case ToolCompleted(name=name, content=content, is_error=True):
                result = escape(_preview(content))
                self.console.print(f"[bold red]tool[/bold red]: {escape(name)} failed -> {result}")
            case ToolCompleted(name=name, content=content):
                result = escape(_preview(content))
                self.console.print(f"[bold green]tool[/bold green]: result {escape(name)} -> {result}")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]Error[/bold red]: {escape(message)}")


def _preview(content: str) -> str:
    if len(content) <= MAX_RESULT_PREVIEW:
        return content
    return f"{content[:MAX_RESULT_PREVIEW]}... ({len(content)} chars)"
