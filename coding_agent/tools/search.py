"""Regex search tool backed by ripgrep."""

import subprocess

from pydantic import BaseModel, ConfigDict, Field

from coding_agent.tools.base import ToolDefinition, ToolError
from coding_agent.utils.logging import get_logger

logger = get_logger(__name__)

RIPGREP = "rg"
NO_MATCHES = "No matches found."

# ripgrep exits with 1 when nothing matched and 2 on errors
RG_EXIT_NO_MATCH = 1


class SearchInput(BaseModel):
    """Input schema for the search tool."""

    model_config = ConfigDict(extra="forbid")

    query: str = Field(..., min_length=1, description="The ripgrep compatible regex pattern to search for.")
    path: str = Field(
        default="",
        description="Optional file or directory path to search within. Defaults to current directory if empty.",
    )
    ignore_case: bool = Field(default=False, description="Perform case-insensitive search.")
    max_count: int = Field(default=0, ge=0, description="Limit the number of matches per file.")


def build_command(params: SearchInput) -> list[str]:
    """Build the ripgrep command line for a search."""
    args = [RIPGREP, "--no-heading", "--with-filename", "--line-number"]
    if params.ignore_case:
        args.append("--ignore-case")
    if params.max_count > 0:
        args.append(f"--max-count={params.max_count}")
    args.extend(["--", params.query, params.path or "."])
    return args


def search(params: SearchInput) -> str:
    """Run ripgrep and return ``file:line:text`` matches."""
    command = build_command(params)
    logger.debug(f"Running {command}")

    # rg prints matched lines as raw bytes; files need not be UTF-8
    try:
        completed = subprocess.run(command, capture_output=True, encoding="utf-8", errors="replace", check=False)
    except OSError as e:
        raise ToolError(f"failed to execute ripgrep: {e}") from e

    if completed.returncode == RG_EXIT_NO_MATCH:
        return NO_MATCHES

    if completed.returncode != 0:
        stderr = completed.stderr.strip()
        if stderr:
            raise ToolError(f"ripgrep failed with exit code {completed.returncode}: {stderr}")
        raise ToolError(f"ripgrep failed with exit code {completed.returncode}")

    return completed.stdout or NO_MATCHES


def create_search_tool() -> ToolDefinition:
    return ToolDefinition(
        name="search",
        description=(
            "Search for a regex pattern in files using ripgrep. Provides filename and line number for matches."
        ),
        input_model=SearchInput,
        handler=search,
    )
