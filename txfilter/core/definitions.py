"""
Filters described declaratively in TOML

A definition is a list of steps, each a table with an `op` and, for
conditions, an `arg`:

    [filters.swaps]
    steps = [
      { op = "or" },
      { op = "to", arg = "0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D" },
      { op = "method", arg = "0x38ed1739" },
      { op = "exit" },
    ]
"""

from typing import Any, Dict, List

from ..config import Config
from ..logger import logger
from .builder import FilterBuilder
from .exceptions import DefinitionError, FilterError
from .tree import FilterTree

CONDITION_OPS = {
    "to": "with_recipient",
    "recipient": "with_recipient",
    "from": "with_sender",
    "sender": "with_sender",
    "method": "with_method",
    "value": "with_value",
}

GROUP_OPS = {
    "and": "and_group",
    "or": "or_group",
    "exit": "exit",
}


def parse_uint(value: Any) -> int:
    """
    Read an integer argument

    TOML integers stop at 64 bits, so larger values are given as decimal or
    0x-prefixed strings.
    """
    if isinstance(value, bool):
        raise DefinitionError(f"Expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 0)
        except ValueError:
            raise DefinitionError(f"Expected an integer, got {value!r}") from None
    raise DefinitionError(f"Expected an integer, got {type(value).__name__}")


def apply_steps(builder: FilterBuilder, steps: List[Dict[str, Any]]) -> FilterBuilder:
    """
    Replay definition steps on a builder

    Raises:
        DefinitionError: Malformed step, or a step whose input was rejected
    """
    if not isinstance(steps, list):
        raise DefinitionError("Filter steps must be a list")

    for index, step in enumerate(steps):
        if not isinstance(step, dict) or "op" not in step:
            raise DefinitionError(f"Step {index}: expected a table with an 'op' key")

        op = str(step["op"]).lower()
        if op in GROUP_OPS:
            getattr(builder, GROUP_OPS[op])()
            continue
        if op not in CONDITION_OPS:
            raise DefinitionError(f"Step {index}: unknown op {op!r}")
        if "arg" not in step:
            raise DefinitionError(f"Step {index} ({op}): missing 'arg'")

        try:
            arg = parse_uint(step["arg"]) if op == "value" else step["arg"]
            getattr(builder, CONDITION_OPS[op])(arg)
        except FilterError as e:
            raise DefinitionError(f"Step {index} ({op}): {e}") from e

    return builder


def get_definition(config: Config, name: str) -> Dict[str, Any]:
    """
    Look up a filter definition and check its shape

    Raises:
        DefinitionError: No such filter, not a table, or no `steps` list
    """
    filters = config.filters
    if not isinstance(filters, dict):
        raise DefinitionError("[filters] must be a table")
    if name not in filters:
        raise DefinitionError(f"No filter named {name!r}")

    definition = filters[name]
    if not isinstance(definition, dict):
        raise DefinitionError(f"Filter {name!r} must be a table")
    if not isinstance(definition.get("steps"), list):
        raise DefinitionError(f"Filter {name!r} needs a 'steps' list")
    return definition


def build_filter(config: Config, name: str) -> FilterTree:
    """Build the filter named `name` with the configured builder options"""
    definition = get_definition(config, name)
    builder = FilterBuilder.from_config(config)
    return apply_steps(builder, definition["steps"]).build()


def render_filters(config: Config) -> Dict[str, str]:
    """
    Build and encode every configured filter

    Returns:
        Dict[str, str]: Wire encoding per filter name, indented when the
            filter (or [output]) sets `pretty = true`

    Raises:
        DefinitionError: A definition or the [builder] options are malformed
    """
    if not isinstance(config.filters, dict):
        raise DefinitionError("[filters] must be a table")

    default_pretty = config.get("output.pretty", False)
    rendered = {}
    for name in config.filters:
        definition = get_definition(config, name)
        tree = build_filter(config, name)
        if definition.get("pretty", default_pretty):
            rendered[name] = tree.serialize(pretty=True)
        else:
            rendered[name] = tree.serialize().decode()
        logger.info(f"Built filter {name}: {tree}")
    return rendered
