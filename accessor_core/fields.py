"""
@file fields.py
@brief Class-body declarations, one helper per element kind.

    class QuizQuestion(Fragment):
        question = text_field(css="input[id$=question]")
        answer1 = text_field({"css": "input[id$=answer1]"})

The attribute name becomes the field name. Fragment replaces each
declaration with the compiled accessors while the class is built.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Mapping, Optional

from .exceptions import ConfigError
from .kinds import ElementKind


class FieldDeclaration:
    """Placeholder holding (kind, selector) until the owning class is built."""

    __slots__ = ("kind", "selector")

    def __init__(self, kind: ElementKind, selector: Mapping[str, Any]):
        self.kind = kind
        self.selector = selector

    def __repr__(self) -> str:
        return f"{self.kind.value}({dict(self.selector)!r})"


def _declarer(kind: ElementKind) -> Callable[..., FieldDeclaration]:
    def declare(selector: Optional[Mapping[str, Any]] = None, **selector_kwargs: Any) -> FieldDeclaration:
        if selector is not None and selector_kwargs:
            raise ConfigError(f"{kind.value}: pass the selector as a mapping or as keywords, not both")
        spec: Mapping[str, Any] = selector if selector is not None else selector_kwargs
        return FieldDeclaration(kind, spec)

    declare.__name__ = kind.value
    declare.__qualname__ = kind.value
    declare.__doc__ = f"Declare a {kind.value} field."
    return declare


text_field = _declarer(ElementKind.TEXT_FIELD)
text_area = _declarer(ElementKind.TEXT_AREA)
hidden_field = _declarer(ElementKind.HIDDEN_FIELD)
div = _declarer(ElementKind.DIV)
label = _declarer(ElementKind.LABEL)
file_field = _declarer(ElementKind.FILE_FIELD)
button = _declarer(ElementKind.BUTTON)
checkbox = _declarer(ElementKind.CHECKBOX)
select_list = _declarer(ElementKind.SELECT_LIST)
link = _declarer(ElementKind.LINK)
span = _declarer(ElementKind.SPAN)
unordered_list = _declarer(ElementKind.UNORDERED_LIST)
table = _declarer(ElementKind.TABLE)
cell = _declarer(ElementKind.CELL)

DECLARERS: Dict[ElementKind, Callable[..., FieldDeclaration]] = {
    ElementKind.TEXT_FIELD: text_field,
    ElementKind.TEXT_AREA: text_area,
    ElementKind.HIDDEN_FIELD: hidden_field,
    ElementKind.DIV: div,
    ElementKind.LABEL: label,
    ElementKind.FILE_FIELD: file_field,
    ElementKind.BUTTON: button,
    ElementKind.CHECKBOX: checkbox,
    ElementKind.SELECT_LIST: select_list,
    ElementKind.LINK: link,
    ElementKind.SPAN: span,
    ElementKind.UNORDERED_LIST: unordered_list,
    ElementKind.TABLE: table,
    ElementKind.CELL: cell,
}
