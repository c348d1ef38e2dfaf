"""Edit file tool."""

from pydantic import BaseModel, ConfigDict, Field

from coding_agent.tools.base import ToolDefinition, ToolError


class EditFileInput(BaseModel):
    """Input schema for the edit_file tool."""

    model_config = ConfigDict(extra="forbid")

    path: str = Field(..., min_length=1, description="The path to the file")
    old_str: str = Field(
        ...,
        min_length=1,
        description="Text to search for - must match exactly and must only have one match exactly",
    )
    new_str: str = Field(..., description="Text to replace old_str with")


def edit_file(params: EditFileInput) -> str:
    """Replace the first occurrence of ``old_str`` with ``new_str`` in place.

    The file is only written when the replacement changed its content, so a
    missing ``old_str`` leaves it untouched.
    """
    try:
        with open(params.path, encoding="utf-8", newline="") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ToolError(f"failed to read file '{params.path}' for editing: {e}") from e

    new_content = content.replace(params.old_str, params.new_str, 1)
    if new_content == content:
        raise ToolError(f"string '{params.old_str}' not found in file '{params.path}'")

    try:
        with open(params.path, "w", encoding="utf-8", newline="") as f:
            f.write(new_content)
    except OSError as e:
        raise ToolError(f"failed to write changes to file '{params.path}': {e}") from e

    return "File edited successfully"


def create_edit_file_tool() -> ToolDefinition:
    return ToolDefinition(
        name="edit_file",
        description=(
            "Edit a file by replacing a specific string with another string. The old string must match exactly "
            "and must only have one match in the file."
        ),
        input_model=EditFileInput,
        handler=edit_file,
    )
