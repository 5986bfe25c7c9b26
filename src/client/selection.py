"""File-selection state for a drag-and-drop / click-to-browse picker.

Holds the selected files, the drag flag and local validation errors. It has
no network awareness; uploading is ``ImageUploader``'s job.
"""

from collections.abc import Iterable
from fnmatch import fnmatch

from core.utils.constants import MAX_FILE_SIZE, format_file_size

from .models import SelectedFile

DEFAULT_ACCEPT = "image/*"


def parse_accept(accept: str) -> tuple[str, ...]:
    """Split an HTML ``accept`` value into lower-cased patterns."""
    return tuple(p.strip().lower() for p in accept.split(",") if p.strip())


def matches_accept(file: SelectedFile, patterns: tuple[str, ...]) -> bool:
    """Check a file against ``image/*``, ``image/png`` or ``.png`` style patterns."""
    if not patterns:
        return True

    mime = file.content_type.lower()
    name = file.name.lower()

    for pattern in patterns:
        if pattern.startswith("."):
            if name.endswith(pattern):
                return True
        elif mime and fnmatch(mime, pattern):
            return True

    return False


class FileSelection:
    """Selected files and drag state, replaced wholesale on each selection."""

    def __init__(
        self,
        *,
        accept: str = DEFAULT_ACCEPT,
        max_size: int = MAX_FILE_SIZE,
        multiple: bool = False,
    ) -> None:
        self.accept = parse_accept(accept)
        self.max_size = max_size
        self.multiple = multiple
        self.files: list[SelectedFile] = []
        self.errors: list[str] = []
        self.is_dragging = False

    def validate(self, file: SelectedFile) -> str | None:
        """Return an error string for ``file``, or ``None`` if it is acceptable."""
        if not matches_accept(file, self.accept):
            return f"{file.name}: wrong type"

        if file.size > self.max_size:
            return (
                f"{file.name}: file too large "
                f"({format_file_size(file.size)}, max {format_file_size(self.max_size)})"
            )

        return None

    def select(self, files: Iterable[SelectedFile]) -> list[SelectedFile]:
        """Replace the selection with the valid files among ``files``."""
        candidates = list(files)
        errors: list[str] = []

        if not self.multiple and len(candidates) > 1:
            errors.append("Only one file can be selected")
            candidates = candidates[:1]

        accepted: list[SelectedFile] = []
        for file in candidates:
            error = self.validate(file)
            if error:
                errors.append(error)
            else:
                accepted.append(file)

        self.files = accepted
        self.errors = errors
        return accepted

    def drag_enter(self) -> None:
        self.is_dragging = True

    def drag_leave(self) -> None:
        self.is_dragging = False

    def drop(self, files: Iterable[SelectedFile]) -> list[SelectedFile]:
        self.is_dragging = False
        return self.select(files)

    def clear(self) -> None:
        self.files = []
        self.errors = []
        self.is_dragging = False

    @property
    def selected(self) -> SelectedFile | None:
        return self.files[0] if self.files else None
