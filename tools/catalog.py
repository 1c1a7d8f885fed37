from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from .base import ToolName, ToolSpec
from .schema import SCOPE_OPTIONS, STRING, ArgField, CommonOptions, NoArgs

NODE = ArgField("node", STRING, "Node name", required=True)
SERVICE = ArgField("service", STRING, "Service name", required=True)
TAG = ArgField("tag", STRING, "Filter by tag")


@dataclass
class NodeArgs:
    node: str
    options: CommonOptions = field(default_factory=CommonOptions)


@dataclass
class ServiceArgs:
    service: str
    tag: Optional[str] = None
    options: CommonOptions = field(default_factory=CommonOptions)


def catalog_datacenters(consul, args: NoArgs):
    return consul.catalog_datacenters()


def catalog_nodes(consul, args: NoArgs):
    return consul.catalog_nodes(**args.options.as_kwargs())


def catalog_node_services(consul, args: NodeArgs):
    return consul.catalog_node_services(args.node, **args.options.as_kwargs())


def catalog_services(consul, args: NoArgs):
    return consul.catalog_services(**args.options.as_kwargs())


def catalog_service_nodes(consul, args: ServiceArgs):
    return consul.catalog_service_nodes(args.service, tag=args.tag, **args.options.as_kwargs())


TOOLS = [
    ToolSpec(
        name=ToolName.CATALOG_DATACENTERS,
        description="List known datacenters",
        fields=(),
        args_type=NoArgs,
        run=catalog_datacenters,
        tags=frozenset({"catalog"}),
    ),
    ToolSpec(
        name=ToolName.CATALOG_NODES,
        description="List nodes in datacenter",
        fields=SCOPE_OPTIONS,
        args_type=NoArgs,
        run=catalog_nodes,
        tags=frozenset({"catalog"}),
    ),
    ToolSpec(
        name=ToolName.CATALOG_NODE_SERVICES,
        description="List services provided by a node",
        fields=(NODE,) + SCOPE_OPTIONS,
        args_type=NodeArgs,
        run=catalog_node_services,
        tags=frozenset({"catalog"}),
    ),
    ToolSpec(
        name=ToolName.CATALOG_SERVICES,
        description="List services in datacenter",
        fields=SCOPE_OPTIONS,
        args_type=NoArgs,
        run=catalog_services,
        tags=frozenset({"catalog"}),
    ),
    ToolSpec(
        name=ToolName.CATALOG_SERVICE_NODES,
        description="List nodes providing a service",
        fields=(SERVICE, TAG) + SCOPE_OPTIONS,
        args_type=ServiceArgs,
        run=catalog_service_nodes,
        tags=frozenset({"catalog"}),
    ),
]
