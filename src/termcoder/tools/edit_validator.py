"""Static safety policy for proposed file edits."""

from termcoder.config import EditPolicy
from termcoder.models.edit_models import Validation
from termcoder.utils.diff_generator import compute_stats

NULL_BYTES_ERROR = "Content contains null bytes"


class EditValidator:
    """Decides whether an edit is safe to apply outright.

    The policy does not parse any language; it only guards against content
    corruption (NUL bytes, an error) and changes too large to review (huge
    files or very long lines, warnings).
    """

    def __init__(self, policy: EditPolicy | None = None) -> None:
        self.policy = policy or EditPolicy()

    @property
    def large_file_warning(self) -> str:
        return f"File becomes very large (>{self.policy.max_file_chars // 1000}KB)"

    @property
    def long_lines_warning(self) -> str:
        return f"Contains very long lines (>{self.policy.max_line_chars} chars)"

    def validate(self, original: str, updated: str) -> Validation:
        warnings: list[str] = []
        errors: list[str] = []

        if len(updated) > self.policy.max_file_chars:
            warnings.append(self.large_file_warning)
        if "\x00" in updated:
            errors.append(NULL_BYTES_ERROR)
        if any(len(line) > self.policy.max_line_chars for line in updated.split("\n")):
            warnings.append(self.long_lines_warning)

        return Validation(
            is_valid=not errors,
            warnings=warnings,
            errors=errors,
            change_stats=compute_stats(original, updated),
        )
