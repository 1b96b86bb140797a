"""Tool registry: names, input schemas and dispatch for the LLM tool surface."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from termcoder.config import AssistantConfig
from termcoder.models.base import CamelModel
from termcoder.models.edit_models import EditRequest, PreviewRequest
from termcoder.models.file_models import (
    FileExistsRequest,
    ListDirectoryRequest,
    ReadFileRequest,
    RenderMarkdownRequest,
    WriteFileRequest,
)
from termcoder.models.search_models import GlobRequest, GrepRequest
from termcoder.services.filesystem import LocalFileSystem
from termcoder.services.glob_service import GlobService
from termcoder.services.path_guard import PathGuard
from termcoder.services.search_process import RipgrepRunner
from termcoder.services.workspace import WorkspaceRoot
from termcoder.tools.directory_tools import DirectoryTools
from termcoder.tools.edit_tools import EditTools
from termcoder.tools.edit_validator import EditValidator
from termcoder.tools.exceptions import ToolError
from termcoder.tools.file_tools import FileTools
from termcoder.tools.search_tools import SearchTools

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_model: type[BaseModel]
    handler: Callable[[Any], CamelModel]

    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)


class ToolRegistry:
    """Maps tool names to handlers and turns every outcome into a plain dict.

    Successful calls return the result model dumped with camelCase keys.
    Failures return ``{"error": <message>, "errorType": <kind>, ...}`` with the
    structured context of the failure; nothing is raised to the caller.
    """

    def __init__(
        self,
        file_tools: FileTools,
        directory_tools: DirectoryTools,
        search_tools: SearchTools,
        edit_tools: EditTools,
    ) -> None:
        specs = [
            ToolSpec(
                "readFile",
                "Read the contents of a file in the workspace",
                ReadFileRequest,
                file_tools.read_file,
            ),
            ToolSpec(
                "writeFile",
                "Create or overwrite a file; reports a diff against the previous content",
                WriteFileRequest,
                file_tools.write_file,
            ),
            ToolSpec(
                "fileExists",
                "Check whether a path exists and whether it is a file or directory",
                FileExistsRequest,
                file_tools.file_exists,
            ),
            ToolSpec(
                "renderMarkdown",
                "Parse a markdown file into plain text plus headings, links and code blocks",
                RenderMarkdownRequest,
                file_tools.render_markdown,
            ),
            ToolSpec(
                "listDirectories",
                "List files and directories at a path",
                ListDirectoryRequest,
                directory_tools.list_directories,
            ),
            ToolSpec(
                "glob",
                "Find files by glob pattern. Use '**/' for recursive matching",
                GlobRequest,
                search_tools.glob,
            ),
            ToolSpec(
                "grep",
                "Search file contents for text or a regex, with surrounding context lines",
                GrepRequest,
                search_tools.grep,
            ),
            ToolSpec(
                "editFile",
                "Edit a file using string replacement with validation and preview "
                "for large changes",
                EditRequest,
                edit_tools.edit_file,
            ),
            ToolSpec(
                "previewEdit",
                "Preview file edit changes without applying them - useful for "
                "validating large changes",
                PreviewRequest,
                edit_tools.preview_edit,
            ),
        ]
        self._specs: dict[str, ToolSpec] = {spec.name: spec for spec in specs}

    @classmethod
    def build(
        cls,
        workspace: WorkspaceRoot,
        config: AssistantConfig | None = None,
    ) -> "ToolRegistry":
        """Wire every tool group against one workspace root."""
        config = config or AssistantConfig()
        fs = LocalFileSystem()
        path_guard = PathGuard(workspace, fs)
        runner = RipgrepRunner(
            command=config.search.rg_command, timeout=config.search.rg_timeout
        )
        return cls(
            file_tools=FileTools(path_guard, fs),
            directory_tools=DirectoryTools(path_guard, fs),
            search_tools=SearchTools(
                path_guard,
                runner=runner,
                glob_service=GlobService(),
                defaults=config.search,
            ),
            edit_tools=EditTools(path_guard, fs, EditValidator(config.edit_policy)),
        )

    def list_tool_names(self) -> list[str]:
        return sorted(self._specs)

    def get(self, name: str) -> ToolSpec | None:
        return self._specs.get(name)

    def execute(self, name: str, arguments: dict[str, Any] | None) -> dict[str, Any]:
        """Run tool ``name`` with raw JSON ``arguments``."""
        spec = self._specs.get(name)
        if spec is None:
            return {"error": f"Unknown tool: {name}", "errorType": "UnknownTool", "tool": name}

        try:
            request = spec.input_model.model_validate(arguments or {})
        except ValidationError as e:
            return {
                "error": f"Invalid input for {name}: {e.errors(include_url=False)}",
                "errorType": "InvalidInput",
                "tool": name,
            }

        try:
            result = spec.handler(request)
        except ToolError as e:
            logger.info("Tool %s failed: %s", name, e)
            return e.to_dict()
        except OSError as e:
            logger.info("Tool %s hit an I/O error: %s", name, e)
            payload: dict[str, Any] = {"error": str(e), "errorType": type(e).__name__}
            if e.filename is not None:
                payload["path"] = str(e.filename)
            return payload
        except UnicodeDecodeError as e:
            return {
                "error": f"File is not valid UTF-8 text: {e}",
                "errorType": "UnicodeDecodeError",
            }

        return result.to_payload()

    def anthropic_tools(self) -> list[dict[str, Any]]:
        """Tool definitions in the Anthropic Messages API format."""
        return [
            {
                "name": spec.name,
                "description": spec.description,
                "input_schema": spec.input_schema(),
            }
            for spec in self._specs.values()
        ]

    def openai_tools(self) -> list[dict[str, Any]]:
        """Tool definitions in the OpenAI Chat Completions format."""
        return [
            {
                "type": "function",
                "function": {
                    "name": spec.name,
                    "description": spec.description,
                    "parameters": spec.input_schema(),
                },
            }
            for spec in self._specs.values()
        ]
