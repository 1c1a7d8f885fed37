import importlib
from collections import OrderedDict

from .base import ToolName

# Listing order of the tool groups
TOOL_MODULES = ("kv", "status", "agent", "catalog", "health")


def load_tools():
    """
    Collect the tool specs of every module in TOOL_MODULES.
    Each tool module must expose:
      - TOOLS (list of ToolSpec)
    Every ToolName member must be registered exactly once.
    """
    tools = OrderedDict()

    package_name = __name__.rsplit(".", 1)[0]  # "tools"

    for name in TOOL_MODULES:
        m = importlib.import_module(f"{package_name}.{name}")

        for spec in getattr(m, "TOOLS", []):
            if spec.name.value in tools:
                raise RuntimeError(f"Tool registered twice: {spec.name.value}")
            tools[spec.name.value] = spec

    missing = [t.value for t in ToolName if t.value not in tools]
    if missing:
        raise RuntimeError(f"Tools without a spec: {missing}")

    return tools
