import logging
from typing import Any, Dict, List, Optional

from .base import CallResult, ToolSpec, error_result, text_result
from .loader import load_tools

log = logging.getLogger(__name__)

TOOL_SPECS = load_tools()


def list_tools(expose_writes: bool = False) -> List[ToolSpec]:
    """Registered tools in listing order; write tools only when exposed."""
    return [spec for spec in TOOL_SPECS.values() if expose_writes or not spec.writes]


def tool_descriptors(expose_writes: bool = False) -> List[Dict[str, Any]]:
    return [spec.to_dict() for spec in list_tools(expose_writes)]


def call_tool(consul, tool_name: str, args: Optional[dict] = None) -> CallResult:
    """Validate ``args``, run the matching Consul call and wrap the outcome.

    Never raises: unknown tools, invalid arguments and backend failures all
    come back as an error-flagged CallResult.
    """
    spec = TOOL_SPECS.get(tool_name)
    if spec is None:
        log.warning("unknown tool requested: %s", tool_name)
        return error_result(f"Unknown tool: {tool_name}")

    keys = sorted(args) if isinstance(args, dict) else []
    log.info("%s called with: %s", tool_name, ", ".join(keys) or "no arguments")

    try:
        params = spec.parse(args)
        return text_result(spec.run(consul, params))
    except Exception as e:
        log.warning("%s failed: %s", tool_name, e)
        return error_result(str(e))
