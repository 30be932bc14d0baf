"""
Tests for the element kind operation templates.
"""

import pytest

from accessor_core.kinds import (
    KIND_TEMPLATES,
    ElementKind,
    Operation as Op,
    has_setter,
    operations_for,
)

EXPECTED = {
    "text_field": {Op.GET_VALUE, Op.SET_VALUE, Op.GET_ELEMENT, Op.EXISTS},
    "text_area": {Op.GET_VALUE, Op.SET_VALUE, Op.GET_ELEMENT, Op.EXISTS},
    "hidden_field": {Op.GET_VALUE, Op.GET_ELEMENT, Op.EXISTS},
    "div": {Op.GET_TEXT, Op.GET_ELEMENT, Op.EXISTS},
    "label": {Op.GET_TEXT, Op.GET_ELEMENT, Op.EXISTS},
    "span": {Op.GET_TEXT, Op.GET_ELEMENT, Op.EXISTS},
    "cell": {Op.GET_TEXT, Op.GET_ELEMENT, Op.EXISTS},
    "file_field": {Op.SET_VALUE, Op.GET_ELEMENT, Op.EXISTS},
    "button": {Op.TRIGGER, Op.GET_ELEMENT, Op.EXISTS},
    "link": {Op.TRIGGER, Op.GET_ELEMENT, Op.EXISTS},
    "checkbox": {
        Op.GET_CHECKED, Op.SET_CHECKED, Op.CHECK, Op.UNCHECK,
        Op.CHECKED_ALIAS, Op.GET_ELEMENT, Op.EXISTS,
    },
    "select_list": {Op.GET_SELECTED, Op.SELECT, Op.LIST_OPTIONS, Op.GET_ELEMENT, Op.EXISTS},
    "unordered_list": {Op.GET_ELEMENT, Op.EXISTS},
    "table": {Op.GET_ELEMENT, Op.EXISTS},
}


class TestTemplateTable:
    """Tests for KIND_TEMPLATES."""

    def test_one_row_per_kind(self):
        """Every kind has exactly one row and nothing else does."""
        assert set(KIND_TEMPLATES) == set(ElementKind)
        assert {k.value for k in ElementKind} == set(EXPECTED)

    @pytest.mark.parametrize("kind", sorted(EXPECTED))
    def test_exact_operation_set(self, kind):
        """Each row lists exactly the expected operations, without repeats."""
        ops = operations_for(kind)
        assert set(ops) == EXPECTED[kind]
        assert len(ops) == len(set(ops))

    @pytest.mark.parametrize("kind", list(ElementKind))
    def test_element_and_exists_always_present(self, kind):
        """get_element and exists are generated for every kind."""
        assert Op.GET_ELEMENT in operations_for(kind)
        assert Op.EXISTS in operations_for(kind)


class TestCoerce:
    """Tests for ElementKind.coerce."""

    def test_accepts_member_and_string(self):
        assert ElementKind.coerce(ElementKind.TABLE) is ElementKind.TABLE
        assert ElementKind.coerce("select_list") is ElementKind.SELECT_LIST

    def test_unknown_kind(self):
        """Unknown kinds list the allowed values."""
        with pytest.raises(ValueError) as exc_info:
            ElementKind.coerce("image")
        assert "image" in str(exc_info.value)
        assert "text_field" in str(exc_info.value)


class TestHasSetter:

    @pytest.mark.parametrize("kind", ["text_field", "text_area", "file_field", "checkbox", "select_list"])
    def test_settable_kinds(self, kind):
        assert has_setter(kind)

    @pytest.mark.parametrize(
        "kind",
        ["hidden_field", "div", "label", "span", "cell", "button", "link", "unordered_list", "table"],
    )
    def test_read_only_kinds(self, kind):
        assert not has_setter(kind)
