"""Workspace tools exposed to the LLM.

Tool groups live in their own modules (``edit_tools``, ``file_tools``,
``search_tools``, ``directory_tools``) and are wired together by
``termcoder.tools.registry.ToolRegistry``. Only the exceptions are re-exported
here, since the services layer imports them.
"""

from termcoder.tools.exceptions import (
    CommandFailed,
    EmptyPattern,
    FileAccessDenied,
    StringNotFound,
    ToolError,
)

__all__ = [
    "CommandFailed",
    "EmptyPattern",
    "FileAccessDenied",
    "StringNotFound",
    "ToolError",
]
