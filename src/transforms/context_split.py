"""Context split and payload assembly transforms.

This module partitions normalized metadata into system and user
context, then folds the context back into the wire-level metadata
shape ``{..user fields.., "context": {..system fields..}}``.
"""

from __future__ import annotations

from typing import AbstractSet, Mapping

from core.constants import CONTEXT_COLLISION_PREFIX, CONTEXT_METADATA_KEY
from core.logging_config import get_logger
from core.types import ContextSplitRecord, LogContext, NormalizedLogRecord
from transforms.charlists import encode_metadata_charlists
from transforms.jsonify import key_text

_LOGGER = get_logger(__name__)


def split_context(
    metadata: Mapping[object, object],
    metadata_keys: AbstractSet[str],
) -> LogContext:
    """Partition metadata by the recognized key set.

    Args:
        metadata: Normalized metadata mapping.
        metadata_keys: Recognized key names routed to system context.

    Returns:
        Disjoint system and user mappings covering every input key.
    """
    system: dict[object, object] = {}
    user: dict[object, object] = {}
    for key, value in metadata.items():
        if key_text(key) in metadata_keys:
            system[key] = value
        else:
            user[key] = value
    return LogContext(system=system, user=user)


def build_context_record(
    record: NormalizedLogRecord,
    metadata_keys: AbstractSet[str],
) -> ContextSplitRecord:
    """Replace record metadata with its split context."""
    return ContextSplitRecord(
        timestamp=record.timestamp,
        level=record.level,
        message=record.message,
        context=split_context(record.metadata, metadata_keys),
    )


def to_payload(record: ContextSplitRecord) -> dict[str, object]:
    """Assemble the wire-level payload from a split record.

    User fields sit at the top of ``metadata`` next to a ``context`` entry
    holding system fields. A user key named ``context`` is renamed with a
    ``user_`` prefix until it no longer clashes.

    Args:
        record: Record with split context.

    Returns:
        Payload dict with timestamp, level, message, and metadata.
    """
    metadata = _merge_user_fields(record.context.user)
    metadata[CONTEXT_METADATA_KEY] = dict(record.context.system)
    return {
        "timestamp": record.timestamp,
        "level": record.level,
        "message": record.message,
        "metadata": encode_metadata_charlists(metadata),
    }


def _merge_user_fields(user: Mapping[object, object]) -> dict[object, object]:
    taken = {key_text(key) for key in user}
    merged: dict[object, object] = {}
    for key, value in user.items():
        if key_text(key) != CONTEXT_METADATA_KEY:
            merged[key] = value
            continue
        renamed = CONTEXT_COLLISION_PREFIX + CONTEXT_METADATA_KEY
        while renamed in taken:
            renamed = CONTEXT_COLLISION_PREFIX + renamed
        taken.add(renamed)
        merged[renamed] = value
        _LOGGER.debug("context_key_renamed", renamed_to=renamed)
    return merged
