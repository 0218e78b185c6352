from __future__ import annotations

import logging
import uuid
from dataclasses import fields, replace
from decimal import Decimal
from typing import Callable, List, Optional

from ..common.money import to_decimal
from ..core.exceptions import NotFoundError, ValidationError
from .model import Shift
from .repository import ShiftRepository
from .rules import validate_shift

logger = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = {"shift_id", "tenant_id"}
_DECIMAL_FIELDS = {"min_working_hours", "max_working_hours", "overtime_multiplier"}


def _new_id() -> str:
    return uuid.uuid4().hex


def _coerce(changes: dict) -> dict:
    return {k: (to_decimal(v) if k in _DECIMAL_FIELDS else v) for k, v in changes.items()}


def create_shift(
    *,
    shift_id: str,
    tenant_id: str,
    name: str,
    start_time: str,
    end_time: str,
    **options,
) -> Shift:
    """Build a validated shift; unspecified options take the template defaults."""
    shift = Shift(
        shift_id=shift_id,
        tenant_id=tenant_id,
        name=(name or "").strip(),
        start_time=start_time,
        end_time=end_time,
        **_coerce(options),
    )
    validate_shift(shift)
    return shift


def update_shift(shift: Shift, **changes) -> Shift:
    """Partial update; the result is re-validated as a whole."""
    known = {f.name for f in fields(Shift)}
    unknown = set(changes) - known
    if unknown:
        raise ValidationError(
            "Unknown shift fields", entity_id=shift.shift_id, field=sorted(unknown)[0], context={"fields": sorted(unknown)}
        )
    locked = _IMMUTABLE_FIELDS & set(changes)
    if locked:
        raise ValidationError("Shift identity cannot be changed", entity_id=shift.shift_id, field=sorted(locked)[0])

    updated = replace(shift, **_coerce(changes))
    validate_shift(updated)
    return updated


def retire_shift(shift: Shift) -> Shift:
    return replace(shift, is_active=False)


def default_shift_templates(tenant_id: str, *, id_factory: Callable[[], str] = _new_id) -> List[Shift]:
    return [
        create_shift(
            shift_id=id_factory(), tenant_id=tenant_id, name="Morning Shift", start_time="08:00", end_time="16:00",
            has_break_time=True, break_duration_minutes=60, min_working_hours=7, max_working_hours=8,
            color="#F59E0B", description="Standard morning shift with 1-hour break",
        ),
        create_shift(
            shift_id=id_factory(), tenant_id=tenant_id, name="Evening Shift", start_time="16:00", end_time="00:00",
            has_break_time=True, break_duration_minutes=60, min_working_hours=7, max_working_hours=8,
            color="#8B5CF6", description="Evening shift with 1-hour break",
        ),
        create_shift(
            shift_id=id_factory(), tenant_id=tenant_id, name="Night Shift", start_time="00:00", end_time="08:00",
            has_break_time=True, break_duration_minutes=60, min_working_hours=7, max_working_hours=8,
            overtime_multiplier=Decimal("2.0"), color="#1F2937", description="Night shift with higher overtime rate",
        ),
        create_shift(
            shift_id=id_factory(), tenant_id=tenant_id, name="Full Day", start_time="08:00", end_time="17:00",
            has_break_time=True, break_duration_minutes=60, min_working_hours=8, max_working_hours=9,
            color="#10B981", description="Full day shift with lunch break",
        ),
    ]


class ShiftService:
    """Use case: create/update shift templates of a tenant."""

    def __init__(self, shifts: ShiftRepository, *, id_factory: Callable[[], str] = _new_id):
        self._shifts = shifts
        self._id_factory = id_factory

    def get(self, shift_id: str) -> Shift:
        shift = self._shifts.get_by_id(shift_id)
        if not shift:
            raise NotFoundError("Shift not found", entity_id=shift_id, field="shift_id")
        return shift

    def _ensure_unique_name(self, tenant_id: str, name: str, *, exclude_id: Optional[str] = None) -> None:
        wanted = name.strip().lower()
        for other in self._shifts.list_for_tenant(tenant_id):
            if other.shift_id != exclude_id and other.name.strip().lower() == wanted:
                raise ValidationError("Shift name already exists", entity_id=other.shift_id, field="name",
                                      context={"name": name})

    def create(self, *, tenant_id: str, name: str, start_time: str, end_time: str, **options) -> Shift:
        shift = create_shift(
            shift_id=self._id_factory(), tenant_id=tenant_id, name=name, start_time=start_time, end_time=end_time, **options
        )
        self._ensure_unique_name(tenant_id, shift.name)
        logger.info("[shift] created %s (%s-%s) tenant=%s", shift.name, shift.start_time, shift.end_time, tenant_id)
        return shift

    def update(self, shift_id: str, **changes) -> Shift:
        shift = update_shift(self.get(shift_id), **changes)
        if "name" in changes:
            self._ensure_unique_name(shift.tenant_id, shift.name, exclude_id=shift.shift_id)
        return shift

    def set_active(self, shift_id: str, is_active: bool) -> Shift:
        shift = self.get(shift_id)
        return replace(shift, is_active=True) if is_active else retire_shift(shift)

    def active_shifts(self, tenant_id: str) -> List[Shift]:
        return [s for s in self._shifts.list_for_tenant(tenant_id) if s.is_active]

    def create_defaults(self, tenant_id: str) -> List[Shift]:
        existing = {s.name.strip().lower() for s in self._shifts.list_for_tenant(tenant_id)}
        templates = default_shift_templates(tenant_id, id_factory=self._id_factory)
        return [t for t in templates if t.name.lower() not in existing]
