"""Models for string-replacement edits and their validation."""

from enum import Enum

from pydantic import ConfigDict, Field, computed_field, model_validator

from termcoder.models.base import CamelModel


class DiffStats(CamelModel):
    """Whole-line change counts between two file contents."""

    model_config = ConfigDict(frozen=True)

    lines_added: int = Field(default=0, ge=0)
    lines_removed: int = Field(default=0, ge=0)

    @computed_field(alias="totalChanges")
    @property
    def total_changes(self) -> int:
        return self.lines_added + self.lines_removed


class Validation(CamelModel):
    """Outcome of the static safety policy applied to an edit."""

    is_valid: bool
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    change_stats: DiffStats


class Recommendation(str, Enum):
    PROCEED = "proceed"
    REVIEW = "review"
    ABORT = "abort"


class PreviewRequest(CamelModel):
    """Input of ``previewEdit``."""

    file_path: str = Field(description="The path to the file to preview editing")
    old_string: str = Field(description="The text to replace")
    new_string: str = Field(description="The text to replace it with")
    replace_all: bool = Field(
        default=False,
        description="Replace all occurrences of oldString (default false)",
    )


class EditRequest(CamelModel):
    """Input of ``editFile``."""

    file_path: str = Field(description="The path to the file to edit")
    old_string: str = Field(description="The text to replace")
    new_string: str = Field(
        description="The text to replace it with (must differ from oldString)"
    )
    replace_all: bool = Field(
        default=False,
        description="Replace all occurrences of oldString (default false)",
    )
    preview: bool = Field(
        default=True,
        description="Show preview for large changes before applying (default true)",
    )
    force: bool = Field(
        default=False,
        description="Skip validation warnings and apply changes (default false)",
    )
    include_diff: bool = Field(
        default=True,
        description="Include diff details in the response (default true)",
    )

    @model_validator(mode="after")
    def _strings_must_differ(self) -> "EditRequest":
        if self.old_string == self.new_string:
            raise ValueError("newString must differ from oldString")
        return self


class EditResult(CamelModel):
    """Result of ``editFile``. ``success`` is False when the write was gated."""

    success: bool
    path: str
    size: int
    diff: str | None = None
    stats: DiffStats
    validation: Validation
    message: str | None = None
    preview: str | None = None


class PreviewResult(CamelModel):
    """Result of ``previewEdit``."""

    path: str
    diff: str
    validation: Validation
    recommendation: Recommendation
