"""Store mutation rules — how each operation kind folds a normalized result into state.

Every rule is a ``(draft, normalized) -> None`` callable applied by the
lifecycle controller inside a store transaction.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from flowtap.application.schemas.envelope import NormalizedResponse
from flowtap.domain.entities import EntityRecord, EntityState, Pagination

logger = logging.getLogger(__name__)

MutationRule = Callable[[EntityState, NormalizedResponse], None]

# Keys the transport adds to every mapping body; they are not record fields.
TRANSPORT_META_KEYS = frozenset({"_message", "_status"})


def as_record(data: Any) -> EntityRecord | Any:
    """A single record, minus transport metadata when the body was the record."""
    if isinstance(data, Mapping):
        return {k: v for k, v in data.items() if k not in TRANSPORT_META_KEYS}
    return data


def as_records(data: Any) -> list[EntityRecord]:
    """A list of records; anything that is not a sequence yields no records."""
    if isinstance(data, (list, tuple)):
        return [as_record(item) for item in data]
    if data is not None:
        logger.warning("Expected a list of records, got %s — treating as empty", type(data).__name__)
    return []


def list_all_rule() -> MutationRule:
    def apply(draft: EntityState, result: NormalizedResponse) -> None:
        draft.replace_collection(
            as_records(result.data),
            Pagination(**result.pagination.model_dump()),
        )
    return apply


def search_rule() -> MutationRule:
    def apply(draft: EntityState, result: NormalizedResponse) -> None:
        draft.replace_collection(as_records(result.data))
    return apply


def get_by_id_rule() -> MutationRule:
    def apply(draft: EntityState, result: NormalizedResponse) -> None:
        draft.select(as_record(result.data))
    return apply


def create_rule() -> MutationRule:
    def apply(draft: EntityState, result: NormalizedResponse) -> None:
        draft.append(as_record(result.data))
    return apply


def update_rule(entity_id: Any) -> MutationRule:
    def apply(draft: EntityState, result: NormalizedResponse) -> None:
        if not draft.replace_record(entity_id, as_record(result.data)):
            logger.debug("Update for id=%s matched no cached record; dropped", entity_id)
    return apply


def delete_rule(entity_id: Any) -> MutationRule:
    def apply(draft: EntityState, result: NormalizedResponse) -> None:
        draft.remove_record(entity_id)
    return apply


def document_rule(name: str) -> MutationRule:
    def apply(draft: EntityState, result: NormalizedResponse) -> None:
        draft.put_document(name, as_record(result.data))
    return apply


def children_rule(parent_id: Any) -> MutationRule:
    def apply(draft: EntityState, result: NormalizedResponse) -> None:
        draft.replace_children(parent_id, as_records(result.data))
    return apply


def child_append_rule(parent_id: Any) -> MutationRule:
    def apply(draft: EntityState, result: NormalizedResponse) -> None:
        draft.add_child(parent_id, as_record(result.data))
    return apply
