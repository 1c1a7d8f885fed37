from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from .base import ToolName, ToolSpec
from .catalog import NODE, SERVICE, TAG, NodeArgs, ServiceArgs
from .schema import BOOLEAN, SCOPE_OPTIONS, STRING, ArgField, CommonOptions

CHECK_STATES = ("any", "passing", "warning", "critical")


@dataclass
class HealthServiceArgs:
    service: str
    tag: Optional[str] = None
    passing: Optional[bool] = None
    options: CommonOptions = field(default_factory=CommonOptions)


@dataclass
class HealthStateArgs:
    state: str
    options: CommonOptions = field(default_factory=CommonOptions)


def health_node(consul, args: NodeArgs):
    # Consul names this parameter "name"
    return consul.health_node(args.node, **args.options.as_kwargs())


def health_checks(consul, args: ServiceArgs):
    return consul.health_checks(args.service, **args.options.as_kwargs())


def health_service(consul, args: HealthServiceArgs):
    return consul.health_service(
        args.service,
        tag=args.tag,
        passing=args.passing,
        **args.options.as_kwargs(),
    )


def health_state(consul, args: HealthStateArgs):
    return consul.health_state(args.state, **args.options.as_kwargs())


TOOLS = [
    ToolSpec(
        name=ToolName.HEALTH_NODE,
        description="Get health information for a node",
        fields=(NODE,) + SCOPE_OPTIONS,
        args_type=NodeArgs,
        run=health_node,
        tags=frozenset({"health"}),
    ),
    ToolSpec(
        name=ToolName.HEALTH_CHECKS,
        description="Get health checks for a service",
        fields=(SERVICE,) + SCOPE_OPTIONS,
        args_type=ServiceArgs,
        run=health_checks,
        tags=frozenset({"health"}),
    ),
    ToolSpec(
        name=ToolName.HEALTH_SERVICE,
        description="Get nodes and health info for a service",
        fields=(SERVICE, TAG, ArgField("passing", BOOLEAN, "Only passing checks")) + SCOPE_OPTIONS,
        args_type=HealthServiceArgs,
        run=health_service,
        tags=frozenset({"health"}),
    ),
    ToolSpec(
        name=ToolName.HEALTH_STATE,
        description="Get checks in a given state",
        fields=(ArgField("state", STRING, "Health check state", required=True, enum=CHECK_STATES),)
        + SCOPE_OPTIONS,
        args_type=HealthStateArgs,
        run=health_state,
        tags=frozenset({"health"}),
    ),
]
