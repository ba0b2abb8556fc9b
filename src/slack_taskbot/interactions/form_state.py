# src/slack_taskbot/interactions/form_state.py

"""
Reading Slack's view state snapshot.

A snapshot is `view.state.values`:

    {block_id: {action_id: {"type": "<element type>", ...payload}}}

Each field is decoded into a FieldValue whose `kind` is checked before its payload is
interpreted. Anything missing or malformed decodes to FieldKind.UNKNOWN; nothing here raises.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class FieldKind(StrEnum):
    USER_PICKER = "users_select"
    TEXT = "plain_text_input"
    EXTERNAL_OPTION = "external_select"
    STATIC_OPTION = "static_select"
    UNKNOWN = "unknown"

    @classmethod
    def from_raw(cls, raw: Any) -> FieldKind:
        if not isinstance(raw, str):
            return cls.UNKNOWN
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_option_picker(self) -> bool:
        return self in (FieldKind.EXTERNAL_OPTION, FieldKind.STATIC_OPTION)


@dataclass(slots=True, frozen=True)
class FieldValue:
    kind: FieldKind
    # users_select -> user id, plain_text_input -> text, *_select -> option value
    value: str | None = None

    @property
    def is_set(self) -> bool:
        return bool(self.value)


UNKNOWN_FIELD = FieldValue(FieldKind.UNKNOWN)


def _str_or_none(raw: Any) -> str | None:
    return raw if isinstance(raw, str) and raw != "" else None


def decode_field(raw: Any) -> FieldValue:
    if not isinstance(raw, Mapping):
        return UNKNOWN_FIELD

    kind = FieldKind.from_raw(raw.get("type"))

    if kind is FieldKind.USER_PICKER:
        return FieldValue(kind, _str_or_none(raw.get("selected_user")))

    if kind is FieldKind.TEXT:
        return FieldValue(kind, _str_or_none(raw.get("value")))

    if kind.is_option_picker:
        option = raw.get("selected_option")
        if isinstance(option, Mapping):
            return FieldValue(kind, _str_or_none(option.get("value")))
        return FieldValue(kind)

    return UNKNOWN_FIELD


def iter_fields(snapshot: Any) -> Iterator[tuple[str, str, FieldValue]]:
    """Yield (block_id, action_id, decoded value) in snapshot order."""
    if not isinstance(snapshot, Mapping):
        return
    for block_id, block in snapshot.items():
        if not isinstance(block, Mapping):
            continue
        for action_id, raw in block.items():
            yield str(block_id), str(action_id), decode_field(raw)


def field_value(snapshot: Any, block_id: str, action_id: str) -> FieldValue:
    if not isinstance(snapshot, Mapping):
        return UNKNOWN_FIELD
    block = snapshot.get(block_id)
    if not isinstance(block, Mapping):
        return UNKNOWN_FIELD
    return decode_field(block.get(action_id))


def find_selected_user(snapshot: Any) -> str | None:
    """First users_select field that currently has a selection, wherever it lives."""
    for _block_id, _action_id, fv in iter_fields(snapshot):
        if fv.kind is FieldKind.USER_PICKER and fv.is_set:
            return fv.value
    return None


def snapshot_from_body(body: Any) -> Any:
    """body["view"]["state"]["values"] or None, tolerating any missing level."""
    cur = body
    for key in ("view", "state", "values"):
        if not isinstance(cur, Mapping):
            return None
        cur = cur.get(key)
    return cur
