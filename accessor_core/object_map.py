# accessor_core/object_map.py
"""
@file object_map.py
@brief Builds Fragment classes from a YAML object map.

    settings:
      allowed_selector_keys: [css, xpath, id]
    fragments:
      QuizQuestion:
        fields:
          question: {kind: text_field, selector: {css: "input[id$=question]"}}
      QuizQuestionWithHint:
        extends: QuizQuestion
        merge_parent_fields: true
        fields:
          hint: {kind: span, selector: {css: span.hint}}
"""

from __future__ import annotations
import json
import os
import types
from typing import Any, Dict, List, Optional, Type

import yaml
from jsonschema import Draft202012Validator

from .exceptions import ConfigError
from .fields import DECLARERS
from .fragment import Fragment
from .kinds import ElementKind

SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "schemas", "object_map.schema.json")


class ObjectMap:
    """
    Loads an object map (YAML), validates it against the bundled JSON
    schema and builds one Fragment subclass per entry on demand.
    """

    def __init__(self, data: Dict[str, Any], base: Type[Fragment] = Fragment, source: str = "<object map>"):
        self.source = source
        self.base = base
        self._validator = Draft202012Validator(self._load_schema(SCHEMA_PATH))
        self.validate(data)
        self._raw = data
        settings = data.get("settings") or {}
        keys = settings.get("allowed_selector_keys")
        self._allowed_selector_keys = frozenset(keys) if keys else None
        self._fragments: Dict[str, Dict[str, Any]] = data["fragments"]
        self._built: Dict[str, Type[Fragment]] = {}
        self._check_extends()

    @classmethod
    def from_file(cls, path: str, base: Type[Fragment] = Fragment) -> ObjectMap:
        path = os.path.abspath(path)
        return cls(cls._load_yaml(path), base=base, source=path)

    @staticmethod
    def _load_yaml(path: str) -> Dict[str, Any]:
        if not os.path.exists(path):
            raise ConfigError(f"Object map YAML not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError("Object map YAML must be a mapping at root.")
        return data

    @staticmethod
    def _load_schema(path: str) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def validate(self, data: Any) -> None:
        """Validate object map against JSON schema."""
        errors = sorted(self._validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
        if errors:
            lines = [f"{self.source}: object map schema validation failed:"]
            for e in errors:
                lines.append(f"- {list(e.path)}: {e.message}")
            raise ConfigError("\n".join(lines))

    def _check_extends(self) -> None:
        for name in self._fragments:
            seen: List[str] = [name]
            parent = self._fragments[name].get("extends")
            while parent is not None:
                if parent not in self._fragments:
                    raise ConfigError(f"fragments.{seen[-1]}.extends references unknown fragment '{parent}'")
                if parent in seen:
                    raise ConfigError(f"fragments.{name}: extends cycle {' -> '.join(seen + [parent])}")
                seen.append(parent)
                parent = self._fragments[parent].get("extends")

    def fragment_names(self) -> List[str]:
        return sorted(self._fragments.keys())

    def build(self, name: str) -> Type[Fragment]:
        """Return the Fragment subclass for ``name``, building it once."""
        if name in self._built:
            return self._built[name]
        if name not in self._fragments:
            raise ConfigError(f"Unknown fragment: {name}")

        spec = self._fragments[name]
        parent_name: Optional[str] = spec.get("extends")
        base = self.build(parent_name) if parent_name else self.base

        namespace: Dict[str, Any] = {"__module__": __name__}
        if self._allowed_selector_keys is not None:
            namespace["allowed_selector_keys"] = self._allowed_selector_keys
        for field_name, field_spec in (spec.get("fields") or {}).items():
            declare = DECLARERS[ElementKind.coerce(field_spec["kind"])]
            namespace[field_name] = declare(field_spec["selector"])

        cls = types.new_class(
            name,
            (base,),
            {"merge_parent_fields": bool(spec.get("merge_parent_fields", False))},
            lambda ns: ns.update(namespace),
        )
        self._built[name] = cls
        return cls

    def build_all(self) -> Dict[str, Type[Fragment]]:
        return {name: self.build(name) for name in self.fragment_names()}


def load_object_map(path: str, base: Type[Fragment] = Fragment) -> ObjectMap:
    return ObjectMap.from_file(path, base=base)
