# accessor_core/registry.py
from __future__ import annotations
import copy
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from accessor_core.exceptions import ConfigError, DuplicateFieldError
from accessor_core.kinds import ElementKind

log = logging.getLogger("accessor_core")


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    kind: ElementKind
    selector: Mapping[str, Any]

    def selector_dict(self) -> Dict[str, Any]:
        """Mutable deep copy of the stored selector."""
        return _thaw(self.selector)


def _freeze(value: Any) -> Any:
    """Read-only deep copy: mappings become proxies, sequences tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(_freeze(item) for item in value)
    return copy.deepcopy(value)


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    if isinstance(value, frozenset):
        return set(value)
    return copy.deepcopy(value)


class AccessorRegistry:
    """
    Field name -> FieldDescriptor map owned by exactly one declaring class.
    Filled while the class is built, then frozen.
    """

    def __init__(self, owner: str, allowed_selector_keys: Optional[Iterable[str]] = None):
        self.owner = owner
        self._allowed = frozenset(allowed_selector_keys) if allowed_selector_keys else None
        self._fields: Dict[str, FieldDescriptor] = {}
        self._frozen = False

    def _validate_selector(self, selector: Any, where: str) -> None:
        if not isinstance(selector, Mapping):
            raise ConfigError(f"{where}: selector must be a mapping, got: {type(selector).__name__}")
        if not selector:
            raise ConfigError(f"{where}: selector must not be empty")
        if self._allowed is not None:
            unknown = set(selector.keys()) - self._allowed
            if unknown:
                raise ConfigError(
                    f"{where}: unknown selector keys: {sorted(unknown)}. Allowed: {sorted(self._allowed)}"
                )

    def prepare(
        self,
        name: str,
        kind: Union[str, ElementKind],
        selector: Mapping[str, Any],
    ) -> FieldDescriptor:
        """
        Validate a field and build its descriptor without storing it.

        Raises the same errors as ``register``.
        """
        where = f"{self.owner}.{name}"
        if self._frozen:
            raise ConfigError(f"{where}: registry of '{self.owner}' is frozen")
        if not isinstance(name, str) or not name.isidentifier():
            raise ConfigError(f"{self.owner}: field name must be an identifier, got: {name!r}")
        if name in self._fields:
            raise DuplicateFieldError(self.owner, name)
        try:
            element_kind = ElementKind.coerce(kind)
        except ValueError as e:
            raise ConfigError(f"{where}: {e}") from e
        self._validate_selector(selector, where)

        return FieldDescriptor(name=name, kind=element_kind, selector=_freeze(selector))

    def add(self, descriptor: FieldDescriptor) -> FieldDescriptor:
        """Store a descriptor built by ``prepare``."""
        if self._frozen:
            raise ConfigError(f"{self.owner}.{descriptor.name}: registry of '{self.owner}' is frozen")
        if descriptor.name in self._fields:
            raise DuplicateFieldError(self.owner, descriptor.name)
        self._fields[descriptor.name] = descriptor
        log.debug("registered field %s.%s kind=%s selector=%s",
                  self.owner, descriptor.name, descriptor.kind.value, descriptor.selector_dict())
        return descriptor

    def register(
        self,
        name: str,
        kind: Union[str, ElementKind],
        selector: Mapping[str, Any],
    ) -> FieldDescriptor:
        return self.add(self.prepare(name, kind, selector))

    def lookup(self, name: str) -> Optional[FieldDescriptor]:
        return self._fields.get(name)

    def merge(self, other: AccessorRegistry) -> None:
        """Copy every descriptor of ``other`` into this registry."""
        for descriptor in other.descriptors():
            self.register(descriptor.name, descriptor.kind, descriptor.selector)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def names(self) -> List[str]:
        return list(self._fields)

    def descriptors(self) -> List[FieldDescriptor]:
        return list(self._fields.values())

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self.descriptors())

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"AccessorRegistry(owner={self.owner!r}, fields={self.names()})"
