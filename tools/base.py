from __future__ import annotations
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, List, Tuple

from .schema import ArgField, ArgumentError, input_schema, parse_args

WRITE_TAG = "write"


class ToolName(str, Enum):
    KV_GET = "kv_get"
    KV_KEYS = "kv_keys"
    KV_SET = "kv_set"
    STATUS_LEADER = "status_leader"
    STATUS_PEERS = "status_peers"
    AGENT_MEMBERS = "agent_members"
    AGENT_SELF = "agent_self"
    CATALOG_DATACENTERS = "catalog_datacenters"
    CATALOG_NODES = "catalog_nodes"
    CATALOG_NODE_SERVICES = "catalog_node_services"
    CATALOG_SERVICES = "catalog_services"
    CATALOG_SERVICE_NODES = "catalog_service_nodes"
    HEALTH_NODE = "health_node"
    HEALTH_CHECKS = "health_checks"
    HEALTH_SERVICE = "health_service"
    HEALTH_STATE = "health_state"


@dataclass(frozen=True)
class ToolSpec:
    """Static descriptor of one tool plus the Consul call it maps to.

    ``run(consul, args)`` receives the parsed ``args_type`` instance.
    """

    name: ToolName
    description: str
    fields: Tuple[ArgField, ...]
    args_type: type
    run: Callable[[Any, Any], Any]
    tags: FrozenSet[str] = frozenset()

    @property
    def required(self) -> List[str]:
        return [f.name for f in self.fields if f.required]

    @property
    def writes(self) -> bool:
        return WRITE_TAG in self.tags

    def parse(self, raw: Any) -> Any:
        try:
            return parse_args(self.args_type, self.fields, raw)
        except ArgumentError as e:
            raise ArgumentError(f"Invalid arguments for {self.name.value}: {e}") from e

    def input_schema(self) -> Dict[str, Any]:
        return input_schema(self.fields)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name.value,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


@dataclass
class CallResult:
    content: List[Dict[str, str]] = field(default_factory=list)
    is_error: bool = False

    @property
    def text(self) -> str:
        return "\n".join(c["text"] for c in self.content)

    def to_dict(self) -> Dict[str, Any]:
        return {"content": self.content, "isError": self.is_error}


def text_result(value: Any) -> CallResult:
    # None renders as the literal "null"
    text = json.dumps(value, ensure_ascii=False, indent=2)
    return CallResult(content=[{"type": "text", "text": text}])


def error_result(message: str) -> CallResult:
    return CallResult(content=[{"type": "text", "text": f"Error: {message}"}], is_error=True)
