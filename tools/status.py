from __future__ import annotations

from .base import ToolName, ToolSpec
from .schema import NoArgs


def status_leader(consul, args: NoArgs):
    return consul.status_leader()


def status_peers(consul, args: NoArgs):
    return consul.status_peers()


TOOLS = [
    ToolSpec(
        name=ToolName.STATUS_LEADER,
        description="Get the current Raft leader",
        fields=(),
        args_type=NoArgs,
        run=status_leader,
        tags=frozenset({"status"}),
    ),
    ToolSpec(
        name=ToolName.STATUS_PEERS,
        description="Get the current Raft peer set",
        fields=(),
        args_type=NoArgs,
        run=status_peers,
        tags=frozenset({"status"}),
    ),
]
