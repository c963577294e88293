"""Domain entity — the cached client-side state of one business entity kind."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Records are opaque server payloads; only their identifier is interpreted.
EntityRecord = dict[str, Any]


class RequestPhase(str, Enum):
    """Lifecycle stage of the most recent request against a store."""

    IDLE = "idle"
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


@dataclass
class Pagination:
    """Page window reported by the server for the last list operation."""

    page: int = 1
    limit: int = 10
    total: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"page": self.page, "limit": self.limit, "total": self.total}


def same_id(left: Any, right: Any) -> bool:
    """Compare two identifiers by string form so ``"1"`` matches ``1``."""
    if left is None or right is None:
        return False
    return str(left) == str(right)


def record_id(record: Any, id_field: str = "id") -> Any:
    """Return a record's identifier, or None for non-mapping payloads."""
    if isinstance(record, dict):
        return record.get(id_field)
    return None


@dataclass
class EntityState:
    """Cached collection, selection and request flags for one entity kind.

    The mutation rules below are the only way the state changes. They are
    applied by the entity store to a draft copy and committed atomically.
    """

    collection: list[EntityRecord] = field(default_factory=list)
    selected: EntityRecord | None = None
    request_phase: RequestPhase = RequestPhase.IDLE
    error: str | None = None
    message: str | None = None
    pagination: Pagination = field(default_factory=Pagination)
    documents: dict[str, Any] = field(default_factory=dict)
    children: dict[str, list[EntityRecord]] = field(default_factory=dict)
    in_flight: int = 0
    id_field: str = "id"

    @property
    def is_loading(self) -> bool:
        return self.request_phase is RequestPhase.PENDING

    def copy(self) -> "EntityState":
        """Return a draft whose containers can be mutated without touching self."""
        return EntityState(
            collection=list(self.collection),
            selected=self.selected,
            request_phase=self.request_phase,
            error=self.error,
            message=self.message,
            pagination=Pagination(**self.pagination.to_dict()),
            documents=dict(self.documents),
            children={key: list(items) for key, items in self.children.items()},
            in_flight=self.in_flight,
            id_field=self.id_field,
        )

    def content(self) -> tuple:
        """Data portion of the state, used to detect reads that changed nothing."""
        return (
            self.collection,
            self.selected,
            self.pagination.to_dict(),
            self.documents,
            self.children,
        )

    # ── Request phase transitions ───────────────────────────────────

    def begin_request(self) -> None:
        self.request_phase = RequestPhase.PENDING
        self.error = None
        self.message = None

    def fulfill(self, message: str | None) -> None:
        self.request_phase = RequestPhase.FULFILLED
        self.message = message
        self.error = None

    def reject(self, error: str) -> None:
        self.request_phase = RequestPhase.REJECTED
        self.error = error
        self.message = None

    # ── Collection rules ────────────────────────────────────────────

    def replace_collection(
        self, records: list[EntityRecord], pagination: Pagination | None = None
    ) -> None:
        """listAll / search: swap the collection wholesale."""
        self.collection = list(records)
        if pagination is not None:
            self.pagination = pagination

    def select(self, record: EntityRecord | None) -> None:
        self.selected = record

    def append(self, record: EntityRecord) -> None:
        """create: a single append with no duplicate check."""
        self.collection.append(record)

    def replace_record(self, entity_id: Any, record: EntityRecord) -> bool:
        """update: replace the first match in place; never inserts.

        Returns False when no record carries ``entity_id``.
        """
        replaced = False
        for index, existing in enumerate(self.collection):
            if same_id(record_id(existing, self.id_field), entity_id):
                self.collection[index] = record
                replaced = True
                break
        if self.selected is not None and same_id(
            record_id(self.selected, self.id_field), entity_id
        ):
            self.selected = record
        return replaced

    def remove_record(self, entity_id: Any) -> int:
        """delete: drop every match and clear a matching selection."""
        before = len(self.collection)
        self.collection = [
            r for r in self.collection
            if not same_id(record_id(r, self.id_field), entity_id)
        ]
        if self.selected is not None and same_id(
            record_id(self.selected, self.id_field), entity_id
        ):
            self.selected = None
        return before - len(self.collection)

    # ── Documents and child collections ─────────────────────────────

    def put_document(self, name: str, payload: Any) -> None:
        self.documents[name] = payload

    def clear_documents(self) -> None:
        self.documents = {}

    def replace_children(self, parent_id: Any, records: list[EntityRecord]) -> None:
        self.children[str(parent_id)] = list(records)

    def add_child(self, parent_id: Any, record: EntityRecord) -> None:
        self.children.setdefault(str(parent_id), []).append(record)
