"""Uniform result shape returned by the dispatcher to every transport."""

from typing import Any, Literal

import mcp.types
from pydantic import BaseModel

ErrorType = Literal[
    "configuration",
    "unknown_tool",
    "invalid_arguments",
    "terminal",
    "exhausted",
    "failed",
]


class ToolResult(BaseModel):
    """Success or failure payload for one tool invocation.

    Attributes:
        ok: Whether the tool completed successfully.
        text: Human readable result or error message.
        error_type: Failure category, ``None`` on success.
        kind: Terminal domain error kind when ``error_type == "terminal"``.
        attempts: Number of adapter invocations made.
    """

    ok: bool
    text: str
    error_type: ErrorType | None = None
    kind: str | None = None
    attempts: int = 0

    @classmethod
    def success(cls, text: str, attempts: int = 1) -> "ToolResult":
        return cls(ok=True, text=text, attempts=attempts)

    @classmethod
    def failure(
        cls,
        text: str,
        error_type: ErrorType,
        *,
        kind: str | None = None,
        attempts: int = 0,
    ) -> "ToolResult":
        return cls(ok=False, text=text, error_type=error_type, kind=kind, attempts=attempts)

    def to_content(self) -> list[mcp.types.TextContent]:
        return [mcp.types.TextContent(type="text", text=self.text)]

    def to_mcp_result(self) -> mcp.types.CallToolResult:
        return mcp.types.CallToolResult(content=self.to_content(), isError=not self.ok)

    def to_call_result(self) -> dict[str, Any]:
        """JSON-RPC ``tools/call`` result payload."""
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": not self.ok,
        }
