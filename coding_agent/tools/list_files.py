"""List files tool."""

import json
import os
from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field

from coding_agent.tools.base import ToolDefinition, ToolError


class ListFilesInput(BaseModel):
    """Input schema for the list_files tool."""

    model_config = ConfigDict(extra="forbid")

    path: str = Field(
        default="",
        description="Optional relative path to list files from. Defaults to current directory if not provided.",
    )


def walk_entries(root: str, prefix: str = "") -> Iterator[str]:
    """Yield entries below ``root`` depth-first in lexical order.

    Paths are relative to the top-level root and use ``/``; directories carry
    a trailing ``/``. Symlinked directories are listed but not descended into.
    """
    with os.scandir(root) as it:
        entries = sorted(it, key=lambda entry: entry.name)

    for entry in entries:
        rel_path = f"{prefix}{entry.name}"
        if entry.is_dir(follow_symlinks=False):
            yield f"{rel_path}/"
            yield from walk_entries(entry.path, f"{rel_path}/")
        else:
            yield rel_path


def list_files(params: ListFilesInput) -> str:
    """Recursively list a directory and return the entries as a JSON array."""
    directory = params.path or "."

    if not os.path.isdir(directory):
        reason = "no such directory" if not os.path.exists(directory) else "not a directory"
        raise ToolError(f"failed to list files in '{directory}': {reason}")

    try:
        files = list(walk_entries(directory))
    except OSError as e:
        raise ToolError(f"failed to list files in '{directory}': {e}") from e

    return json.dumps(files)


def create_list_files_tool() -> ToolDefinition:
    return ToolDefinition(
        name="list_files",
        description=(
            "List files and directories at a given path. If no path is provided, lists files in the current "
            "directory."
        ),
        input_model=ListFilesInput,
        handler=list_files,
    )
