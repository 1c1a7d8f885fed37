from tools import TOOL_SPECS, list_tools, tool_descriptors
from tools.base import ToolName

LISTED = [
    "kv_get",
    "kv_keys",
    "status_leader",
    "status_peers",
    "agent_members",
    "agent_self",
    "catalog_datacenters",
    "catalog_nodes",
    "catalog_node_services",
    "catalog_services",
    "catalog_service_nodes",
    "health_node",
    "health_checks",
    "health_service",
    "health_state",
]

REQUIRED = {
    "kv_get": ["key"],
    "kv_keys": ["key"],
    "kv_set": ["key", "value"],
    "catalog_node_services": ["node"],
    "catalog_service_nodes": ["service"],
    "health_node": ["node"],
    "health_checks": ["service"],
    "health_service": ["service"],
    "health_state": ["state"],
}


def test_every_tool_name_is_registered():
    assert set(TOOL_SPECS) == {t.value for t in ToolName}


def test_list_tools_returns_fifteen_descriptors():
    descriptors = tool_descriptors()
    assert len(descriptors) == 15
    assert [d["name"] for d in descriptors] == LISTED


def test_required_fields():
    for d in tool_descriptors(expose_writes=True):
        assert d["inputSchema"].get("required", []) == REQUIRED.get(d["name"], [])


def test_kv_set_listed_only_when_writes_exposed():
    names = [spec.name.value for spec in list_tools(expose_writes=True)]
    assert len(names) == 16
    assert names[:3] == ["kv_get", "kv_keys", "kv_set"]
    assert "kv_set" not in [spec.name.value for spec in list_tools()]


def test_descriptor_schema():
    kv_get = TOOL_SPECS["kv_get"].to_dict()
    assert kv_get["description"] == "Get a key-value pair from Consul KV store"
    props = kv_get["inputSchema"]["properties"]
    assert list(props) == ["key", "recurse", "raw", "buffer", "dc", "token", "consistent", "stale"]
    assert props["recurse"] == {"type": "boolean", "description": "Return all keys with given prefix"}

    state = TOOL_SPECS["health_state"].input_schema()["properties"]["state"]
    assert state["enum"] == ["any", "passing", "warning", "critical"]

    assert TOOL_SPECS["kv_set"].input_schema()["properties"]["flags"]["type"] == "number"
    assert TOOL_SPECS["kv_set"].input_schema()["properties"]["cas"]["minimum"] == 0


def test_options_per_tool():
    def props(name):
        return set(TOOL_SPECS[name].input_schema()["properties"])

    assert props("kv_keys") == {"key", "separator", "dc", "token", "consistent", "stale"}
    assert props("kv_set") == {"key", "value", "flags", "cas", "acquire", "release", "dc", "token"}
    assert props("catalog_nodes") == {"dc", "token"}
    assert props("health_service") == {"service", "tag", "passing", "dc", "token"}
    assert props("status_leader") == set()
    assert props("agent_self") == set()


def test_no_argument_tools_have_empty_object_schema():
    for name in ("status_leader", "status_peers", "agent_self", "catalog_datacenters"):
        assert TOOL_SPECS[name].input_schema() == {"type": "object", "properties": {}}
