from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from .base import ToolName, ToolSpec
from .schema import BOOLEAN, SCOPE_OPTIONS, ArgField, CommonOptions, NoArgs


@dataclass
class AgentMembersArgs:
    wan: Optional[bool] = None
    options: CommonOptions = field(default_factory=CommonOptions)


def agent_members(consul, args: AgentMembersArgs):
    return consul.agent_members(wan=args.wan, **args.options.as_kwargs())


def agent_self(consul, args: NoArgs):
    return consul.agent_self()


TOOLS = [
    ToolSpec(
        name=ToolName.AGENT_MEMBERS,
        description="Get cluster members as seen by the agent",
        fields=(ArgField("wan", BOOLEAN, "Return WAN members instead of LAN"),) + SCOPE_OPTIONS,
        args_type=AgentMembersArgs,
        run=agent_members,
        tags=frozenset({"agent"}),
    ),
    ToolSpec(
        name=ToolName.AGENT_SELF,
        description="Get agent configuration and member information",
        fields=(),
        args_type=NoArgs,
        run=agent_self,
        tags=frozenset({"agent"}),
    ),
]
