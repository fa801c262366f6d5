from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Literal, Union

from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError
from pydantic import BaseModel, ConfigDict, Field

from ..services.auth import AuthenticationRequiredError


class TextContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content: List[TextContent] = Field(default_factory=list)
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def from_text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)])

    @property
    def text(self) -> str:
        return "\n".join(item.text for item in self.content)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class FailureKind(str, Enum):
    PROTOCOL = "protocol"
    AUTHENTICATION = "authentication"
    DOWNSTREAM = "downstream"


@dataclass(frozen=True)
class ToolFailure:
    kind: FailureKind
    message: str

    @classmethod
    def protocol(cls, message: str) -> "ToolFailure":
        return cls(FailureKind.PROTOCOL, message)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ToolFailure":
        if isinstance(exc, AuthenticationRequiredError):
            return cls(FailureKind.AUTHENTICATION, str(exc))
        if isinstance(exc, RefreshError):
            detail = exc.args[0] if exc.args and isinstance(exc.args[0], str) else str(exc)
            return cls(FailureKind.AUTHENTICATION, detail)
        if isinstance(exc, HttpError):
            return cls(FailureKind.DOWNSTREAM, getattr(exc, "reason", None) or str(exc))
        if isinstance(exc, ValueError):
            return cls(FailureKind.PROTOCOL, str(exc))
        return cls(FailureKind.DOWNSTREAM, str(exc) or exc.__class__.__name__)

    def to_result(self) -> ToolResult:
        return ToolResult(content=[TextContent(text=f"Error: {self.message}")], is_error=True)


HandlerOutcome = Union[ToolResult, ToolFailure]
