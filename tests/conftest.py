import pytest


class FakeConsul:
    """In-memory stand-in for ConsulAPI that records every call."""

    def __init__(self):
        self.kv = {}
        self.calls = []

    def _record(self, method, *args, **kwargs):
        self.calls.append((method, args, kwargs))

    def kv_get(self, key, **kwargs):
        self._record("kv_get", key, **kwargs)
        if kwargs.get("recurse"):
            return [{"Key": k, "Value": v} for k, v in sorted(self.kv.items()) if k.startswith(key)]
        if key not in self.kv:
            return None
        if kwargs.get("raw"):
            return self.kv[key]
        return {"Key": key, "Value": self.kv[key], "Flags": 0}

    def kv_keys(self, key, **kwargs):
        self._record("kv_keys", key, **kwargs)
        return sorted(k for k in self.kv if k.startswith(key))

    def kv_set(self, key, value, **kwargs):
        self._record("kv_set", key, value, **kwargs)
        self.kv[key] = value
        return True

    def status_leader(self):
        self._record("status_leader")
        return "10.0.0.1:8300"

    def status_peers(self):
        self._record("status_peers")
        return ["10.0.0.1:8300", "10.0.0.2:8300"]

    def agent_members(self, **kwargs):
        self._record("agent_members", **kwargs)
        return [{"Name": "test-node", "Addr": "10.0.0.1", "Status": 1}]

    def agent_self(self):
        self._record("agent_self")
        return {"Config": {"NodeName": "test-node", "Datacenter": "dc1"}}

    def catalog_datacenters(self):
        self._record("catalog_datacenters")
        return ["dc1"]

    def catalog_nodes(self, **kwargs):
        self._record("catalog_nodes", **kwargs)
        return [{"Node": "test-node", "Address": "10.0.0.1"}]

    def catalog_node_services(self, node, **kwargs):
        self._record("catalog_node_services", node, **kwargs)
        return {"Node": {"Node": node}, "Services": {"web": {"Service": "web"}}}

    def catalog_services(self, **kwargs):
        self._record("catalog_services", **kwargs)
        return {"consul": [], "test-service": ["v1"]}

    def catalog_service_nodes(self, service, **kwargs):
        self._record("catalog_service_nodes", service, **kwargs)
        return [{"Node": "test-node", "ServiceName": service}]

    def health_node(self, name, **kwargs):
        self._record("health_node", name, **kwargs)
        return [{"Node": name, "CheckID": "serfHealth", "Status": "passing"}]

    def health_checks(self, service, **kwargs):
        self._record("health_checks", service, **kwargs)
        return [{"ServiceName": service, "Status": "passing"}]

    def health_service(self, service, **kwargs):
        self._record("health_service", service, **kwargs)
        return [{"Node": {"Node": "test-node"}, "Service": {"Service": service}, "Checks": []}]

    def health_state(self, state, **kwargs):
        self._record("health_state", state, **kwargs)
        return [{"Node": "test-node", "Status": "passing" if state == "any" else state}]


class BrokenConsul:
    """Every Consul call fails the way an unreachable agent does."""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise ConnectionError("connection refused")

        return fail


@pytest.fixture
def fake_consul():
    return FakeConsul()


@pytest.fixture
def broken_consul():
    return BrokenConsul()


# Smallest valid argument bag for every registered tool
MINIMAL_ARGS = {
    "kv_get": {"key": "test/sample-key"},
    "kv_keys": {"key": "test/"},
    "kv_set": {"key": "test/sample-key", "value": "sample-value"},
    "status_leader": {},
    "status_peers": {},
    "agent_members": {},
    "agent_self": {},
    "catalog_datacenters": {},
    "catalog_nodes": {},
    "catalog_node_services": {"node": "test-node"},
    "catalog_services": {},
    "catalog_service_nodes": {"service": "test-service"},
    "health_node": {"node": "test-node"},
    "health_checks": {"service": "test-service"},
    "health_service": {"service": "test-service"},
    "health_state": {"state": "any"},
}
