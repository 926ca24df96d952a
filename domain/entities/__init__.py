from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, List, Mapping, Optional, Sequence, Tuple, Union

# Rows and chart points are plain records keyed by the service's column names
Row = Mapping[str, Any]

PREVIEW_ROW_LIMIT = 10

_SPREADSHEET_CONTENT_TYPES = {
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xls": "application/vnd.ms-excel",
}


class MessageKind(Enum):
    """Tag identifying each timeline message variant."""

    USER = "user"
    SYSTEM = "system"
    ERROR = "error"
    BOT = "bot"


@dataclass(frozen=True)
class UserMessage:
    """Echo of a submitted query."""

    text: str
    kind: ClassVar[MessageKind] = MessageKind.USER


@dataclass(frozen=True)
class SystemMessage:
    """Confirmation of a successful dataset upload."""

    text: str
    kind: ClassVar[MessageKind] = MessageKind.SYSTEM


@dataclass(frozen=True)
class ErrorMessage:
    """Failure notice for an upload or a query."""

    text: str
    kind: ClassVar[MessageKind] = MessageKind.ERROR


@dataclass(frozen=True)
class BotMessage:
    """Result of a successful query."""

    summary: str
    chart_series: Optional[Tuple[Row, ...]] = None
    table_preview: Optional[Tuple[Row, ...]] = None
    table_full: Optional[Tuple[Row, ...]] = None
    locations_for_export: Optional[Tuple[str, ...]] = None
    kind: ClassVar[MessageKind] = MessageKind.BOT

    @property
    def has_chart(self) -> bool:
        return bool(self.chart_series)

    @property
    def has_table(self) -> bool:
        return bool(self.table_preview)

    @property
    def record_count(self) -> int:
        return len(self.table_full or ())


Message = Union[UserMessage, SystemMessage, ErrorMessage, BotMessage]


def preview_rows(
    rows: Optional[Sequence[Row]], limit: int = PREVIEW_ROW_LIMIT
) -> Optional[Tuple[Row, ...]]:
    """Return the first ``limit`` rows, or ``None`` when there are no rows at all."""
    if rows is None:
        return None
    return tuple(rows[:limit])


@dataclass(frozen=True)
class DatasetFile:
    """A spreadsheet selected by the user for upload."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "DatasetFile":
        file_path = Path(path)
        content_type = _SPREADSHEET_CONTENT_TYPES.get(
            file_path.suffix.lower(), "application/octet-stream"
        )
        return cls(
            filename=file_path.name,
            content=file_path.read_bytes(),
            content_type=content_type,
        )


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the session handed to the presentation layer."""

    dataset_loaded: bool
    known_locations: Tuple[str, ...]
    busy: bool
    pending_input: str
    timeline: Tuple[Message, ...]


@dataclass
class Session:
    """Interaction state for a single conversation.

    The timeline is append-only: messages are added through :meth:`append`
    and exposed as a tuple so callers cannot reorder or drop entries.
    """

    dataset_loaded: bool = False
    known_locations: Tuple[str, ...] = ()
    busy: bool = False
    pending_input: str = ""
    _timeline: List[Message] = field(default_factory=list, init=False, repr=False)

    @property
    def timeline(self) -> Tuple[Message, ...]:
        return tuple(self._timeline)

    def append(self, message: Message) -> None:
        self._timeline.append(message)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            dataset_loaded=self.dataset_loaded,
            known_locations=self.known_locations,
            busy=self.busy,
            pending_input=self.pending_input,
            timeline=self.timeline,
        )


__all__ = [
    "Row",
    "PREVIEW_ROW_LIMIT",
    "MessageKind",
    "UserMessage",
    "SystemMessage",
    "ErrorMessage",
    "BotMessage",
    "Message",
    "preview_rows",
    "DatasetFile",
    "SessionSnapshot",
    "Session",
]
