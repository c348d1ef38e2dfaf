"""JSON schema generation for tool inputs."""

from typing import Any

from pydantic import BaseModel

_DROPPED_KEYS = frozenset({"title"})


def generate_schema(input_model: type[BaseModel]) -> dict[str, Any]:
    """Derive a self-contained JSON schema from a tool input model.

    The result is what the Messages API expects for ``input_schema``: an
    object schema with inline property definitions (no ``$ref``/``$defs``),
    the required field names and ``additionalProperties`` disabled.
    """
    raw = input_model.model_json_schema()
    definitions = raw.get("$defs", {})

    properties = {
        name: _inline(prop, definitions) for name, prop in raw.get("properties", {}).items()
    }

    schema: dict[str, Any] = {
        "type": "object",
        "properties": properties,
        "additionalProperties": False,
    }
    required = raw.get("required", [])
    if required:
        schema["required"] = list(required)
    return schema


def _inline(node: Any, definitions: dict[str, Any]) -> Any:
    """Resolve local references and strip presentation-only keys."""
    if isinstance(node, list):
        return [_inline(item, definitions) for item in node]
    if not isinstance(node, dict):
        return node

    all_of = node.get("allOf")
    if isinstance(all_of, list) and len(all_of) == 1:
        node = {**{k: v for k, v in node.items() if k != "allOf"}, **all_of[0]}

    ref = node.get("$ref")
    if isinstance(ref, str) and ref.startswith("#/$defs/"):
        target = definitions[ref.removeprefix("#/$defs/")]
        merged = {**target, **{k: v for k, v in node.items() if k != "$ref"}}
        return _inline(merged, definitions)

    inlined: dict[str, Any] = {}
    for key, value in node.items():
        if key in _DROPPED_KEYS:
            continue
        if key == "properties" and isinstance(value, dict):
            inlined[key] = {name: _inline(prop, definitions) for name, prop in value.items()}
        else:
            inlined[key] = _inline(value, definitions)
    return inlined
