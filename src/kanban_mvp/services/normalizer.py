"""Validation and coercion of untrusted task records.

Every path that brings tasks in from storage, import files or form
submissions goes through `normalize_many` or `normalize_one` before the
result may touch the board state.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Container, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from ..models import ALLOWED_STATUSES, Task, TaskStatus
from ..utils import generate_task_id, now_ms

logger = logging.getLogger(__name__)


def _is_list_like(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _coerce_timestamp(value: Any) -> int | None:
    """Return a finite numeric timestamp as int, None otherwise."""
    # bool is an int subclass but never a timestamp
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    return value


def _is_encodable(text: str) -> bool:
    """True if the text survives UTF-8 encoding (no lone surrogates)."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def normalize_one(
    raw: Any,
    *,
    taken: Container[str] = (),
    now: int | None = None,
) -> Task | None:
    """
    Turn one untrusted record into a valid Task.

    Args:
        raw: Anything; only mappings (or Task instances) can be accepted.
        taken: IDs already accepted in the current batch. A generated ID
            never collides with these.
        now: Timestamp used when createdAt is missing (defaults to now).

    Returns:
        The normalized task, or None if the record is rejected (not a
        mapping, or an empty or non-encodable title). Never raises for
        malformed input.
    """
    if isinstance(raw, Task):
        raw = raw.to_record()
    if not isinstance(raw, Mapping):
        logger.debug("Dropping task record: not a mapping (%s)", type(raw).__name__)
        return None

    title = raw.get("title")
    title = title.strip() if isinstance(title, str) else ""
    if not title:
        logger.debug("Dropping task record: empty title (id=%r)", raw.get("id"))
        return None
    if not _is_encodable(title):
        logger.debug("Dropping task record: title is not valid unicode (id=%r)", raw.get("id"))
        return None

    status = raw.get("status")
    if not isinstance(status, str) or status not in ALLOWED_STATUSES:
        status = TaskStatus.TODO.value

    description = raw.get("description")
    if not isinstance(description, str) or not _is_encodable(description):
        description = ""

    created_at = _coerce_timestamp(raw.get("createdAt"))
    if created_at is None:
        created_at = now if now is not None else now_ms()
    updated_at = _coerce_timestamp(raw.get("updatedAt"))
    if updated_at is None:
        updated_at = created_at

    task_id = raw.get("id")
    task_id = task_id.strip() if isinstance(task_id, str) else ""
    if not task_id or not _is_encodable(task_id):
        task_id = generate_task_id(taken)

    try:
        return Task(
            id=task_id,
            title=title,
            description=description,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
        )
    except ValidationError as e:
        logger.debug("Dropping task record: %s", e.errors()[0]["msg"])
        return None


def normalize_many(raw_list: Any) -> list[Task]:
    """
    Turn an untrusted list of records into valid tasks with unique IDs.

    Invalid records are skipped. When an accepted record reuses an ID that
    an earlier record already claimed, the later record gets a fresh ID.
    Output order follows input order. Anything that is not list-like
    yields an empty list.
    """
    if not _is_list_like(raw_list):
        if raw_list is not None:
            logger.debug("Cannot normalize tasks from %s", type(raw_list).__name__)
        return []

    result: list[Task] = []
    seen: set[str] = set()
    now = now_ms()

    for raw in raw_list:
        task = normalize_one(raw, taken=seen, now=now)
        if task is None:
            continue

        if task.id in seen:
            new_id = generate_task_id(seen)
            logger.debug("Duplicate task id %s reassigned to %s", task.id, new_id)
            task = task.model_copy(update={"id": new_id})

        seen.add(task.id)
        result.append(task)

    dropped = len(raw_list) - len(result)
    if dropped:
        logger.debug("Normalized %d tasks, dropped %d records", len(result), dropped)
    return result


def extract_tasks_source(document: Any) -> list | None:
    """
    Find the task list inside a parsed JSON document.

    Accepts a bare array or an envelope ``{"tasks": [...], ...}``;
    extra envelope fields are ignored.

    Returns:
        The raw (unvalidated) task list, or None if the document has
        neither shape.
    """
    if isinstance(document, list):
        return document
    if isinstance(document, Mapping) and isinstance(document.get("tasks"), list):
        return document["tasks"]
    return None
