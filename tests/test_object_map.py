"""
Tests for building fragments from YAML object maps.
"""

import textwrap

import pytest

from accessor_core.exceptions import ConfigError, DuplicateFieldError
from accessor_core.fragment import Fragment
from accessor_core.object_map import ObjectMap, load_object_map

from conftest import FakeElement

QUIZ_MAP = """
settings:
  allowed_selector_keys: [css, xpath]
fragments:
  QuizQuestion:
    fields:
      question: {kind: text_field, selector: {css: "input[id$=question]"}}
      answer1: {kind: text_field, selector: {css: "input[id$=answer1]"}}
      remove: {kind: button, selector: {xpath: "//button[@class='remove']"}}
  HintedQuestion:
    extends: QuizQuestion
    merge_parent_fields: true
    fields:
      hint: {kind: span, selector: {css: span.hint}}
"""


def write_map(tmp_path, text):
    path = tmp_path / "fragments.yaml"
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return str(path)


class TestLoad:
    """Tests for loading and validation."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_object_map(str(tmp_path / "nope.yaml"))
        assert "not found" in str(exc_info.value)

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_object_map(write_map(tmp_path, "fragments: [unclosed"))
        assert "Invalid YAML" in str(exc_info.value)

    def test_root_must_be_mapping(self, tmp_path):
        with pytest.raises(ConfigError):
            load_object_map(write_map(tmp_path, "- a\n- b\n"))

    def test_schema_errors_are_collected(self, tmp_path):
        text = """
        fragments:
          Broken:
            fields:
              logo: {kind: image, selector: {css: img}}
              empty: {kind: div, selector: {}}
        """
        with pytest.raises(ConfigError) as exc_info:
            load_object_map(write_map(tmp_path, text))
        message = str(exc_info.value)
        assert "schema validation failed" in message
        assert "logo" in message
        assert "empty" in message

    def test_unknown_extends(self):
        data = {"fragments": {"A": {"extends": "Missing", "fields": {}}}}
        with pytest.raises(ConfigError) as exc_info:
            ObjectMap(data)
        assert "Missing" in str(exc_info.value)

    def test_extends_cycle(self):
        data = {"fragments": {
            "A": {"extends": "B", "fields": {}},
            "B": {"extends": "A", "fields": {}},
        }}
        with pytest.raises(ConfigError) as exc_info:
            ObjectMap(data)
        assert "cycle" in str(exc_info.value)


class TestBuild:
    """Tests for ObjectMap.build."""

    def test_builds_fragment_classes(self, tmp_path, page):
        object_map = load_object_map(write_map(tmp_path, QUIZ_MAP))
        assert object_map.fragment_names() == ["HintedQuestion", "QuizQuestion"]

        cls = object_map.build("QuizQuestion")
        assert issubclass(cls, Fragment)
        assert cls.__name__ == "QuizQuestion"
        assert cls.accessor_registry().names() == ["question", "answer1", "remove"]

        block = FakeElement()
        field = block.add("text_field", {"css": "input[id$=question]"}, FakeElement())
        question = cls(page_object=page, parent_element=block)
        question.question = "123"
        assert field.value == "123"
        assert question.settable_fields() == {"question", "answer1"}
        assert question.remove_exists() is False

    def test_build_is_cached(self, tmp_path):
        object_map = load_object_map(write_map(tmp_path, QUIZ_MAP))
        assert object_map.build("QuizQuestion") is object_map.build("QuizQuestion")

    def test_extends_with_merge(self, tmp_path):
        classes = load_object_map(write_map(tmp_path, QUIZ_MAP)).build_all()
        hinted = classes["HintedQuestion"]
        assert issubclass(hinted, classes["QuizQuestion"])
        assert hinted.accessor_registry().names() == ["question", "answer1", "remove", "hint"]

    def test_unknown_fragment(self, tmp_path):
        with pytest.raises(ConfigError):
            load_object_map(write_map(tmp_path, QUIZ_MAP)).build("Nope")

    def test_selector_keys_enforced(self):
        data = {
            "settings": {"allowed_selector_keys": ["css"]},
            "fragments": {"A": {"fields": {"title": {"kind": "label", "selector": {"xpath": "//label"}}}}},
        }
        with pytest.raises(ConfigError) as exc_info:
            ObjectMap(data).build("A")
        assert "xpath" in str(exc_info.value)

    def test_generated_collision(self):
        data = {"fragments": {"A": {"fields": {
            "agree": {"kind": "checkbox", "selector": {"css": "#agree"}},
            "agree_checked": {"kind": "span", "selector": {"css": "#x"}},
        }}}}
        with pytest.raises(DuplicateFieldError):
            ObjectMap(data).build("A")

    def test_custom_base(self, page, container):
        class Audited(Fragment):
            def after_initialize(self, options):
                self.audit = options.get("audit")

        data = {"fragments": {"A": {"fields": {"title": {"kind": "label", "selector": {"css": "label"}}}}}}
        cls = ObjectMap(data, base=Audited).build("A")
        assert cls(page_object=page, parent_element=container, audit="on").audit == "on"
