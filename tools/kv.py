from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from .base import WRITE_TAG, ToolName, ToolSpec
from .schema import (
    BOOLEAN,
    DC,
    NUMBER,
    READ_OPTIONS,
    STRING,
    TOKEN,
    ArgField,
    CommonOptions,
)


@dataclass
class KvGetArgs:
    key: str
    recurse: Optional[bool] = None
    raw: Optional[bool] = None
    buffer: Optional[bool] = None
    options: CommonOptions = field(default_factory=CommonOptions)


@dataclass
class KvKeysArgs:
    key: str
    separator: Optional[str] = None
    options: CommonOptions = field(default_factory=CommonOptions)


@dataclass
class KvSetArgs:
    key: str
    value: str
    flags: Optional[int] = None
    cas: Optional[int] = None
    acquire: Optional[str] = None
    release: Optional[str] = None
    options: CommonOptions = field(default_factory=CommonOptions)


def kv_get(consul, args: KvGetArgs):
    return consul.kv_get(
        args.key,
        recurse=args.recurse,
        raw=args.raw,
        buffer=args.buffer,
        **args.options.as_kwargs(),
    )


def kv_keys(consul, args: KvKeysArgs):
    return consul.kv_keys(args.key, separator=args.separator, **args.options.as_kwargs())


def kv_set(consul, args: KvSetArgs):
    return consul.kv_set(
        args.key,
        args.value,
        flags=args.flags,
        cas=args.cas,
        acquire=args.acquire,
        release=args.release,
        **args.options.as_kwargs(),
    )


TOOLS = [
    ToolSpec(
        name=ToolName.KV_GET,
        description="Get a key-value pair from Consul KV store",
        fields=(
            ArgField("key", STRING, "Key to retrieve", required=True),
            ArgField("recurse", BOOLEAN, "Return all keys with given prefix"),
            ArgField("raw", BOOLEAN, "Return raw value"),
            ArgField("buffer", BOOLEAN, "Leave values base64 encoded instead of decoding them"),
        )
        + READ_OPTIONS,
        args_type=KvGetArgs,
        run=kv_get,
        tags=frozenset({"kv"}),
    ),
    ToolSpec(
        name=ToolName.KV_KEYS,
        description="List keys in Consul KV store with given prefix",
        fields=(
            ArgField("key", STRING, "Key prefix", required=True),
            ArgField("separator", STRING, "List keys up to separator"),
        )
        + READ_OPTIONS,
        args_type=KvKeysArgs,
        run=kv_keys,
        tags=frozenset({"kv"}),
    ),
    ToolSpec(
        name=ToolName.KV_SET,
        description="Set a key-value pair in Consul KV store",
        fields=(
            ArgField("key", STRING, "Key to write", required=True),
            ArgField("value", STRING, "Value to store", required=True),
            ArgField("flags", NUMBER, "Opaque unsigned integer stored with the key", whole=True),
            ArgField("cas", NUMBER, "Only write if the key's ModifyIndex matches (0 = create only)", whole=True),
            ArgField("acquire", STRING, "Session ID to lock the key with"),
            ArgField("release", STRING, "Session ID to release the lock of"),
            DC,
            TOKEN,
        ),
        args_type=KvSetArgs,
        run=kv_set,
        tags=frozenset({"kv", WRITE_TAG}),
    ),
]
