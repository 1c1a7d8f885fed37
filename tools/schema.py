# tools/schema.py
from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple

STRING = "string"
BOOLEAN = "boolean"
NUMBER = "number"


class ArgumentError(ValueError):
    pass


def _assert(cond: bool, msg: str) -> None:
    if not cond:
        raise ArgumentError(msg)


@dataclass(frozen=True)
class ArgField:
    """One named input of a tool: primitive type, description, required flag.

    String fields may restrict their values with ``enum``; number fields
    marked ``whole`` only take non-negative integers.
    """

    name: str
    type: str
    description: str
    required: bool = False
    enum: Optional[Tuple[str, ...]] = None
    whole: bool = False

    def check(self, value: Any) -> Any:
        if self.type == STRING:
            _assert(isinstance(value, str), f"{self.name} must be a string")
            if self.enum is not None:
                _assert(value in self.enum, f"{self.name} must be one of: {', '.join(self.enum)}")
        elif self.type == BOOLEAN:
            _assert(isinstance(value, bool), f"{self.name} must be a boolean")
        elif self.type == NUMBER:
            # bool is an int subclass; a JSON true is not a number
            _assert(
                isinstance(value, (int, float)) and not isinstance(value, bool),
                f"{self.name} must be a number",
            )
            if self.whole:
                _assert(
                    (isinstance(value, int) or value.is_integer()) and value >= 0,
                    f"{self.name} must be a non-negative integer",
                )
                return int(value)
        return value

    def to_schema(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type, "description": self.description}
        if self.enum is not None:
            out["enum"] = list(self.enum)
        if self.whole:
            out["minimum"] = 0
        return out


# -----------------------------
# Common options
# -----------------------------
DC = ArgField("dc", STRING, "Datacenter")
TOKEN = ArgField("token", STRING, "ACL token")
CONSISTENT = ArgField("consistent", BOOLEAN, "Require strong consistency")
STALE = ArgField("stale", BOOLEAN, "Use stale data")

SCOPE_OPTIONS = (DC, TOKEN)
READ_OPTIONS = (DC, TOKEN, CONSISTENT, STALE)


@dataclass
class CommonOptions:
    dc: Optional[str] = None
    token: Optional[str] = None
    consistent: Optional[bool] = None
    stale: Optional[bool] = None

    def as_kwargs(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


_OPTION_NAMES = tuple(f.name for f in fields(CommonOptions))


@dataclass
class NoArgs:
    options: CommonOptions = field(default_factory=CommonOptions)


def parse_fields(raw: Any, declared: Tuple[ArgField, ...]) -> Dict[str, Any]:
    """Validate ``raw`` against ``declared`` and return the present values.

    ``None`` counts as absent. Keys that are not declared are ignored, and a
    tool without fields ignores its arguments altogether.
    """
    if not declared:
        return {}
    if raw is None:
        raw = {}
    _assert(isinstance(raw, dict), "arguments must be an object")

    values: Dict[str, Any] = {}
    for f in declared:
        value = raw.get(f.name)
        if value is None:
            _assert(not f.required, f"{f.name} is required")
            continue
        values[f.name] = f.check(value)
    return values


def parse_args(args_type: type, declared: Tuple[ArgField, ...], raw: Any) -> Any:
    """Build an ``args_type`` instance from a raw argument bag.

    Common options are split off into the embedded ``options`` field.
    """
    values = parse_fields(raw, declared)
    options = CommonOptions(**{k: values.pop(k) for k in _OPTION_NAMES if k in values})
    return args_type(options=options, **values)


def input_schema(declared: Tuple[ArgField, ...]) -> Dict[str, Any]:
    schema: Dict[str, Any] = {
        "type": "object",
        "properties": {f.name: f.to_schema() for f in declared},
    }
    required = [f.name for f in declared if f.required]
    if required:
        schema["required"] = required
    return schema
