"""Immutable field updates for the handoff record."""

from __future__ import annotations

import dataclasses
import logging

from handoffdesk.report.model import (
    ORIENTATION_KEYS,
    ORIENTATION_PREFIX,
    FieldValue,
    OrientationFlags,
    ShiftRecord,
    field_attr,
    field_id_for,
)

LOGGER = logging.getLogger(__name__)

_RECORD_ATTRS = frozenset(item.name for item in dataclasses.fields(ShiftRecord))


def apply_change(record: ShiftRecord, field_path: str, value: FieldValue) -> ShiftRecord:
    """Return a copy of ``record`` with ``field_path`` set to ``value``.

    ``orientation.<flag>`` paths replace a single flag and leave the other
    three untouched. ``record`` itself is never modified.
    """
    if field_path.startswith(ORIENTATION_PREFIX):
        flag = field_path[len(ORIENTATION_PREFIX) :]
        if flag not in ORIENTATION_KEYS:
            raise KeyError(field_path)
        _require_type(field_path, value, bool)
        orientation = dataclasses.replace(record.orientation, **{flag: value})
        LOGGER.debug("apply_change path=%s", field_path)
        return dataclasses.replace(record, orientation=orientation)

    attr = _resolve_attr(field_path)
    current = getattr(record, attr)
    if isinstance(current, OrientationFlags):
        raise KeyError(field_path)
    _require_type(field_path, value, bool if isinstance(current, bool) else str)
    LOGGER.debug("apply_change path=%s", field_path)
    return dataclasses.replace(record, **{attr: value})


def field_value(record: ShiftRecord, field_path: str) -> FieldValue:
    """Read the scalar stored at ``field_path``."""
    if field_path.startswith(ORIENTATION_PREFIX):
        flag = field_path[len(ORIENTATION_PREFIX) :]
        if flag not in ORIENTATION_KEYS:
            raise KeyError(field_path)
        return getattr(record.orientation, flag)
    value = getattr(record, _resolve_attr(field_path))
    if isinstance(value, OrientationFlags):
        raise KeyError(field_path)
    return value


def _resolve_attr(field_path: str) -> str:
    attr = field_attr(field_path)
    if attr not in _RECORD_ATTRS or field_id_for(attr) != field_path:
        raise KeyError(field_path)
    return attr


def _require_type(field_path: str, value: object, expected: type) -> None:
    if type(value) is not expected:
        raise TypeError(
            f"{field_path} expects {expected.__name__}, got {type(value).__name__}"
        )


__all__ = ["apply_change", "field_value"]
