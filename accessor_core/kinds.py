"""
@file kinds.py
@brief Element kinds and the per-kind operation template table.

The table is closed: every ElementKind has exactly one row, and the
compiler generates exactly the operations listed in that row.
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, FrozenSet, Tuple, Union


class ElementKind(str, Enum):
    TEXT_FIELD = "text_field"
    TEXT_AREA = "text_area"
    HIDDEN_FIELD = "hidden_field"
    DIV = "div"
    LABEL = "label"
    FILE_FIELD = "file_field"
    BUTTON = "button"
    CHECKBOX = "checkbox"
    SELECT_LIST = "select_list"
    LINK = "link"
    SPAN = "span"
    UNORDERED_LIST = "unordered_list"
    TABLE = "table"
    CELL = "cell"

    @classmethod
    def coerce(cls, kind: Union[str, "ElementKind"]) -> "ElementKind":
        """Accept either a member or its string value."""
        if isinstance(kind, cls):
            return kind
        try:
            return cls(str(kind))
        except ValueError:
            allowed = sorted(k.value for k in cls)
            raise ValueError(f"Unknown element kind: {kind!r}. Allowed: {allowed}") from None


class Operation(str, Enum):
    GET_VALUE = "get_value"
    SET_VALUE = "set_value"
    GET_TEXT = "get_text"
    TRIGGER = "trigger"
    GET_CHECKED = "get_checked"
    SET_CHECKED = "set_checked"
    CHECK = "check"
    UNCHECK = "uncheck"
    CHECKED_ALIAS = "checked_alias"
    GET_SELECTED = "get_selected"
    SELECT = "select"
    LIST_OPTIONS = "list_options"
    GET_ELEMENT = "get_element"
    EXISTS = "exists"


# Shared tail of every row.
_STANDARD: Tuple[Operation, ...] = (Operation.GET_ELEMENT, Operation.EXISTS)

_VALUE_FIELD = (Operation.GET_VALUE, Operation.SET_VALUE) + _STANDARD
_TEXT_ONLY = (Operation.GET_TEXT,) + _STANDARD
_CLICKABLE = (Operation.TRIGGER,) + _STANDARD

KIND_TEMPLATES: Dict[ElementKind, Tuple[Operation, ...]] = {
    ElementKind.TEXT_FIELD: _VALUE_FIELD,
    ElementKind.TEXT_AREA: _VALUE_FIELD,
    ElementKind.HIDDEN_FIELD: (Operation.GET_VALUE,) + _STANDARD,
    ElementKind.DIV: _TEXT_ONLY,
    ElementKind.LABEL: _TEXT_ONLY,
    ElementKind.SPAN: _TEXT_ONLY,
    ElementKind.CELL: _TEXT_ONLY,
    ElementKind.FILE_FIELD: (Operation.SET_VALUE,) + _STANDARD,
    ElementKind.BUTTON: _CLICKABLE,
    ElementKind.LINK: _CLICKABLE,
    ElementKind.CHECKBOX: (
        Operation.GET_CHECKED,
        Operation.SET_CHECKED,
        Operation.CHECK,
        Operation.UNCHECK,
        Operation.CHECKED_ALIAS,
    ) + _STANDARD,
    ElementKind.SELECT_LIST: (
        Operation.GET_SELECTED,
        Operation.SELECT,
        Operation.LIST_OPTIONS,
    ) + _STANDARD,
    ElementKind.UNORDERED_LIST: _STANDARD,
    ElementKind.TABLE: _STANDARD,
}

SETTER_OPERATIONS: FrozenSet[Operation] = frozenset(
    {Operation.SET_VALUE, Operation.SET_CHECKED, Operation.SELECT}
)


def operations_for(kind: Union[str, ElementKind]) -> Tuple[Operation, ...]:
    """Return the operation bundle generated for ``kind``."""
    return KIND_TEMPLATES[ElementKind.coerce(kind)]


def has_setter(kind: Union[str, ElementKind]) -> bool:
    return any(op in SETTER_OPERATIONS for op in operations_for(kind))
