from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .results import ToolFailure

JsonSchema = Dict[str, Any]

_MISSING: Any = object()

_TYPE_CHECKS: Dict[str, Callable[[Any], bool]] = {
    "string": lambda value: isinstance(value, str),
    "number": lambda value: isinstance(value, (int, float)) and not isinstance(value, bool),
    "integer": lambda value: isinstance(value, int) and not isinstance(value, bool),
    "boolean": lambda value: isinstance(value, bool),
    "array": lambda value: isinstance(value, (list, tuple)),
}

_ARTICLES = {"string": "a string", "number": "a number", "integer": "an integer", "boolean": "a boolean", "array": "an array"}


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


class CapabilityNotFoundError(KeyError):
    """Raised when a tool name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown tool: {self.name}"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    type: str
    description: str = ""
    required: bool = False
    default: Any = _MISSING
    default_factory: Optional[Callable[[], Any]] = None
    items: Optional[str] = None
    param: str = ""

    def __post_init__(self) -> None:
        if self.type not in _TYPE_CHECKS:
            raise ValueError(f"Unsupported field type '{self.type}' for '{self.name}'.")
        if not self.param:
            object.__setattr__(self, "param", _snake_case(self.name))

    @property
    def schema(self) -> JsonSchema:
        schema: JsonSchema = {"type": self.type}
        if self.items:
            schema["items"] = {"type": self.items}
        if self.description:
            schema["description"] = self.description
        if self.default is not _MISSING:
            schema["default"] = self.default
        return schema

    def fallback(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        if self.default is not _MISSING:
            return self.default
        return None

    def coerce(self, value: Any) -> Any:
        """Return ``value`` in the declared type or raise ``TypeError``."""

        if self.type == "integer" and isinstance(value, float) and value.is_integer():
            value = int(value)
        if not _TYPE_CHECKS[self.type](value):
            raise TypeError(f"Argument '{self.name}' must be {_ARTICLES[self.type]}")
        if self.type == "array":
            if self.items:
                for item in value:
                    if not _TYPE_CHECKS[self.items](item):
                        raise TypeError(f"Argument '{self.name}' must contain only {self.items} values")
            return list(value)
        return value


@dataclass(frozen=True)
class Capability:
    name: str
    description: str
    handler: Callable[..., Any]
    fields: Tuple[FieldSpec, ...] = ()

    @property
    def input_schema(self) -> JsonSchema:
        schema: JsonSchema = {"type": "object", "properties": {}}
        for spec in self.fields:
            schema["properties"][spec.name] = spec.schema
        required = [spec.name for spec in self.fields if spec.required]
        if required:
            schema["required"] = required
        return schema

    def bind(self, arguments: Any) -> Union[Mapping[str, Any], ToolFailure]:
        """Validate ``arguments`` and fill defaults, keyed by handler parameter name."""

        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            return ToolFailure.protocol("Tool arguments must be an object")

        missing = [spec.name for spec in self.fields if spec.required and arguments.get(spec.name) is None]
        if missing:
            noun = "argument" if len(missing) == 1 else "arguments"
            return ToolFailure.protocol(f"Missing required {noun}: {', '.join(missing)}")

        bound: Dict[str, Any] = {}
        for spec in self.fields:
            value = arguments.get(spec.name)
            if value is None:
                bound[spec.param] = spec.fallback()
                continue
            try:
                bound[spec.param] = spec.coerce(value)
            except TypeError as exc:
                return ToolFailure.protocol(str(exc))
        return MappingProxyType(bound)

    def as_tool(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}


class CapabilityRegistry:
    def __init__(self, capabilities: Iterable[Capability] = ()) -> None:
        self._capabilities: Dict[str, Capability] = {}
        for capability in capabilities:
            self.add(capability)

    def add(self, capability: Capability) -> None:
        if capability.name in self._capabilities:
            raise ValueError(f"Tool '{capability.name}' is already registered.")
        self._capabilities[capability.name] = capability

    def list_capabilities(self) -> List[Capability]:
        return list(self._capabilities.values())

    def resolve(self, name: str) -> Capability:
        try:
            return self._capabilities[name]
        except KeyError:
            raise CapabilityNotFoundError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._capabilities

    def __iter__(self) -> Iterator[Capability]:
        return iter(self._capabilities.values())

    def __len__(self) -> int:
        return len(self._capabilities)


REGISTRY = CapabilityRegistry()


def register_tool(
    name: str,
    *,
    description: str,
    fields: Iterable[FieldSpec] = (),
    registry: Optional[CapabilityRegistry] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        target = registry if registry is not None else REGISTRY
        target.add(Capability(name=name, description=description, handler=func, fields=tuple(fields)))
        return func

    return decorator


def get_registry() -> CapabilityRegistry:
    return REGISTRY
