"""Exceptions for workspace tool operations."""

from typing import Any


class ToolError(Exception):
    """Base exception for all tool operations.

    Every subclass carries the structured context a caller needs to decide
    whether to retry with different arguments.
    """

    tag = "ToolError"

    def context(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": str(self), "errorType": self.tag, **self.context()}


class FileAccessDenied(ToolError):
    """Raised when a path resolves outside the workspace root."""

    tag = "FileAccessDenied"

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Access denied: '{path}' is outside the workspace")

    def context(self) -> dict[str, Any]:
        return {"path": self.path}


class StringNotFound(ToolError):
    """Raised when the anchor text of an edit is absent from the file."""

    tag = "StringNotFound"

    def __init__(self, path: str, old_string: str) -> None:
        self.path = path
        self.old_string = old_string
        super().__init__(f"String not found in {path}: {old_string!r}")

    def context(self) -> dict[str, Any]:
        return {"path": self.path, "oldString": self.old_string}


class EmptyPattern(ToolError):
    """Raised when a search pattern is empty or whitespace only."""

    tag = "EmptyPattern"

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__("Search pattern must not be empty")

    def context(self) -> dict[str, Any]:
        return {"pattern": self.pattern}


class CommandFailed(ToolError):
    """Raised when the external search process cannot run or exits with an error."""

    tag = "CommandFailed"

    def __init__(self, command: str, args: list[str], message: str) -> None:
        self.command = command
        self.args_list = list(args)
        self.message = message
        super().__init__(f"{command} failed: {message}")

    def context(self) -> dict[str, Any]:
        return {"command": self.command, "args": self.args_list, "message": self.message}
