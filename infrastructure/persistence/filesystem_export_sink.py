from pathlib import Path
from typing import Optional

from domain.services import ExportSink
from infrastructure.config import DEFAULT_EXPORT_FILENAME


class FilesystemExportSink(ExportSink):
    """Write exported CSV files into a download directory.

    Existing files are never overwritten; a numbered suffix is added instead,
    the way browsers name repeated downloads.
    """

    def __init__(
        self,
        base_path: str = "downloads",
        default_filename: str = DEFAULT_EXPORT_FILENAME,
    ) -> None:
        self.base_path = Path(base_path)
        self.default_filename = default_filename

    def _safe_name(self, filename: Optional[str]) -> str:
        # Drop directory components and control characters the service may have included
        cleaned = "".join(ch for ch in (filename or "") if ch.isprintable())
        name = Path(cleaned.replace("\\", "/")).name.strip()
        return name or self.default_filename

    def _available_path(self, name: str) -> Path:
        candidate = self.base_path / name
        stem, suffix = candidate.stem, candidate.suffix
        counter = 1
        while candidate.exists():
            candidate = self.base_path / f"{stem} ({counter}){suffix}"
            counter += 1
        return candidate

    def save(self, filename: Optional[str], csv_data: str) -> Path:
        self.base_path.mkdir(parents=True, exist_ok=True)
        path = self._available_path(self._safe_name(filename))
        path.write_text(csv_data, encoding="utf-8", newline="")
        return path
