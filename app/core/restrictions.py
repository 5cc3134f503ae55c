"""Enforcement of capability qualifiers.

Each qualifier in the permission table has exactly one helper here, so call
sites never re-implement "own records only" or "hide the parent phone".
"""

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar
from uuid import UUID

from app.core.exceptions import PermissionDeniedError
from app.core.permissions import (
    WORKFLOW_MODULES,
    Module,
    Role,
    can_approve,
    should_hide_parent_phone,
    should_only_update_status,
    should_show_only_own_classes,
    should_show_only_own_data,
)

T = TypeVar("T")

PARENT_PHONE_FIELDS = ("parent_phone", "parentPhone", "phone_parent")


def _get(record: Any, attr: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(attr)
    return getattr(record, attr, None)


def own_data_scope(role: Role, module: Module, staff_id: UUID) -> UUID | None:
    """Staff id a listing must be narrowed to, or None for unrestricted.

    Narrowed when the entry carries ``only_own_data``, and in workflow
    modules when the role cannot approve (non-approvers only see their own
    submissions).
    """
    if should_show_only_own_data(role, module):
        return staff_id
    if module in WORKFLOW_MODULES and not can_approve(role, module):
        return staff_id
    return None


def filter_own_records(
    records: Iterable[T],
    role: Role,
    module: Module,
    staff_id: UUID,
    attr: str = "staff_id",
) -> list[T]:
    """Drop records that do not belong to ``staff_id`` when scoped."""
    scope = own_data_scope(role, module, staff_id)
    if scope is None:
        return list(records)
    return [r for r in records if _get(r, attr) == scope]


def filter_own_classes(
    classes: Iterable[T],
    role: Role,
    module: Module,
    staff_id: UUID,
    attr: str = "teacher_ids",
) -> list[T]:
    """Keep only classes the staff member is assigned to when scoped."""
    if not should_show_only_own_classes(role, module):
        return list(classes)
    return [c for c in classes if staff_id in (_get(c, attr) or ())]


def redact_parent_phone(
    record: Mapping[str, Any],
    role: Role,
    module: Module,
    fields: Iterable[str] = PARENT_PHONE_FIELDS,
) -> dict[str, Any]:
    """Copy of ``record`` with parent phone fields blanked when required."""
    redacted = dict(record)
    if should_hide_parent_phone(role, module):
        for field in fields:
            if field in redacted:
                redacted[field] = None
    return redacted


def restrict_to_status_update(
    changes: Mapping[str, Any],
    role: Role,
    module: Module,
    status_field: str = "status",
) -> dict[str, Any]:
    """Validate an update against ``only_update_status``.

    Raises PermissionDeniedError if any field other than ``status_field`` is
    being changed by a role limited to status updates.
    """
    if should_only_update_status(role, module):
        extra = sorted(k for k in changes if k != status_field)
        if extra:
            raise PermissionDeniedError(
                f"Only '{status_field}' can be updated; not allowed: {', '.join(extra)}"
            )
    return dict(changes)
