"""Tool catalog: each tool declares its parameters and is called with validated keywords."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

QUERY = "query"
POSITIVE_INT = "positive_int"
STRING = "string"
STRING_LIST = "string_list"

_KIND_DESCRIPTIONS = {
    QUERY: "a non-empty string",
    POSITIVE_INT: "a positive integer",
    STRING: "a string",
    STRING_LIST: "a list of non-empty strings",
}


class ToolError(Exception):
    """A request-level failure with a stable error code."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


@dataclass(slots=True, frozen=True)
class Param:
    """One named tool argument."""

    name: str
    kind: str
    required: bool = False
    maximum: int | None = None

    def check(self, tool: str, value: object) -> object:
        """Return the value when it fits the declared kind, else raise INVALID_PARAMS."""
        if not _fits(self.kind, value):
            raise ToolError(
                "INVALID_PARAMS",
                f"{tool} {self.name} must be {_KIND_DESCRIPTIONS[self.kind]}.",
            )
        if self.maximum is not None and isinstance(value, int) and value > self.maximum:
            raise ToolError("INVALID_PARAMS", f"{tool} {self.name} must be <= {self.maximum}.")
        return value

    def describe(self) -> dict[str, object]:
        described: dict[str, object] = {
            "name": self.name,
            "type": self.kind,
            "required": self.required,
        }
        if self.maximum is not None:
            described["maximum"] = self.maximum
        return described


def _fits(kind: str, value: object) -> bool:
    if kind == QUERY:
        return isinstance(value, str) and bool(value.strip())
    if kind == POSITIVE_INT:
        return isinstance(value, int) and not isinstance(value, bool) and value >= 1
    if kind == STRING:
        return isinstance(value, str)
    if kind == STRING_LIST:
        return isinstance(value, list) and all(isinstance(item, str) and item for item in value)
    raise ValueError(f"unknown parameter kind: {kind}")


@dataclass(slots=True, frozen=True)
class Tool:
    """A named operation over the service.

    ``run`` receives only the declared parameters that were supplied, as
    keyword arguments; undeclared keys are ignored.
    """

    name: str
    description: str
    run: Callable[..., dict[str, object]]
    params: tuple[Param, ...] = ()

    def call(self, arguments: dict[str, object]) -> dict[str, object]:
        keywords: dict[str, object] = {}
        for param in self.params:
            value = arguments.get(param.name)
            if value is None:
                if param.required:
                    raise ToolError(
                        "INVALID_PARAMS",
                        f"{self.name} {param.name} must be {_KIND_DESCRIPTIONS[param.kind]}.",
                    )
                continue
            keywords[param.name] = param.check(self.name, value)
        return self.run(**keywords)

    def describe(self) -> dict[str, object]:
        return {
            "name": self.name,
            "description": self.description,
            "params": [param.describe() for param in self.params],
        }


class ToolCatalog:
    """Tools by name, in the order they were added."""

    def __init__(self, tools: Iterable[Tool] = ()) -> None:
        self._tools: dict[str, Tool] = {}
        for tool in tools:
            self.add(tool)

    def add(self, tool: Tool) -> None:
        if tool.name in self._tools:
            raise ValueError(f"duplicate tool name: {tool.name}")
        self._tools[tool.name] = tool

    def names(self) -> tuple[str, ...]:
        return tuple(self._tools)

    def describe(self) -> list[dict[str, object]]:
        """Name, description and parameters of every tool."""
        return [tool.describe() for tool in self._tools.values()]

    def call(self, name: str, arguments: dict[str, object]) -> dict[str, object]:
        """Validate arguments and run the named tool."""
        tool = self._tools.get(name)
        if tool is None:
            raise ToolError("UNKNOWN_TOOL", f"Unknown tool: {name}")
        return tool.call(arguments)
