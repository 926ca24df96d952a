from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional


class ExportSink(ABC):
    """Interface for saving exported CSV data where the user can open it."""

    @abstractmethod
    def save(self, filename: Optional[str], csv_data: str) -> Path:
        """Persist ``csv_data`` under ``filename``, falling back to a default name."""
        raise NotImplementedError
