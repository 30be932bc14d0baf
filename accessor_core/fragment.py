# accessor_core/fragment.py
"""
@file fragment.py
@brief Base class for page-object fragments with generated accessors.

A fragment wraps one container element located by an enclosing page
object (for example one of many repeated question blocks on a quiz page)
and exposes the fields declared on its class, resolved inside that
container only.
"""

from __future__ import annotations
import logging
from typing import Any, ClassVar, Dict, FrozenSet, List, Mapping, Optional, Set, Type, TypeVar, Union

from .compiler import COMPILER
from .exceptions import ConstructionError, UnknownFieldError
from .fields import FieldDeclaration
from .interfaces import IDriver, IElement, IPage
from .kinds import ElementKind, has_setter
from .registry import AccessorRegistry, FieldDescriptor
from .resolver import RESOLVER

log = logging.getLogger("accessor_core")

F = TypeVar("F", bound="Fragment")


class Fragment(IPage):
    """
    Mini page object bound to a container element.

    Subclasses declare fields in the class body with the helpers from
    ``accessor_core.fields``. Each subclass owns a registry of its own;
    pass ``merge_parent_fields=True`` in the class statement to copy the
    parents' descriptors into it.
    """

    _accessor_registry: ClassVar[AccessorRegistry]
    _reserved_names: ClassVar[FrozenSet[str]] = frozenset()

    # Restricts selector keys for every field of the class when set.
    allowed_selector_keys: ClassVar[Optional[FrozenSet[str]]] = None

    def __init_subclass__(cls, merge_parent_fields: bool = False, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        registry = AccessorRegistry(cls.__qualname__, allowed_selector_keys=cls.allowed_selector_keys)
        if merge_parent_fields:
            for base in cls.__bases__:
                parent = getattr(base, "_accessor_registry", None)
                if parent is not None:
                    registry.merge(parent)
        cls._accessor_registry = registry

        declarations = [
            (name, value) for name, value in cls.__dict__.items()
            if isinstance(value, FieldDeclaration)
        ]
        for name, _ in declarations:
            delattr(cls, name)
        for name, declaration in declarations:
            cls._register_field(declaration.kind, name, declaration.selector)

    @classmethod
    def _register_field(
        cls,
        kind: Union[str, ElementKind],
        name: str,
        selector: Mapping[str, Any],
    ) -> FieldDescriptor:
        registry = cls._accessor_registry
        descriptor = registry.prepare(name, kind, selector)
        # install checks every generated name before attaching any of them
        COMPILER.install(cls, descriptor, reserved=cls._reserved_names)
        return registry.add(descriptor)

    @classmethod
    def declare(
        cls,
        kind: Union[str, ElementKind],
        name: str,
        selector: Mapping[str, Any],
    ) -> FieldDescriptor:
        """
        Register a field after the class statement.

        Only allowed until the first instance is created; the registry is
        frozen from then on.
        """
        return cls._register_field(kind, name, selector)

    @classmethod
    def accessor_registry(cls) -> AccessorRegistry:
        return cls._accessor_registry

    def __init__(self, page_object: Any = None, parent_element: Optional[IElement] = None, **options: Any):
        owner = type(self).__name__
        if page_object is None:
            raise ConstructionError(owner, "page object")
        if not hasattr(page_object, "driver"):
            raise ConstructionError(owner, "page object driver")
        if parent_element is None:
            raise ConstructionError(owner, "parent element")

        self.page_object = page_object
        self.parent_element = parent_element
        type(self)._accessor_registry.freeze()
        self.after_initialize(options)

    def after_initialize(self, options: Dict[str, Any]) -> None:
        """Extension point called once the required references are set."""
        pass

    @property
    def driver(self) -> IDriver:
        return self.page_object.driver

    # --- Resolution ---

    def _resolve_descriptor(self, descriptor: FieldDescriptor) -> IElement:
        return RESOLVER.resolve(
            self.driver,
            self.parent_element,
            descriptor.kind,
            descriptor.selector,
            field_name=descriptor.name,
        )

    def child_element(self, name: str) -> IElement:
        """Resolve a declared field by name."""
        descriptor = type(self)._accessor_registry.lookup(name)
        if descriptor is None:
            raise UnknownFieldError(type(self).__name__, name)
        return self._resolve_descriptor(descriptor)

    def from_parent_element(self, kind: Union[str, ElementKind], selector: Mapping[str, Any]) -> IElement:
        """Look up an undeclared element inside this fragment's container."""
        return RESOLVER.resolve(self.driver, self.parent_element, kind, selector)

    def nested_fragments(
        self,
        fragment_cls: Type[F],
        kind: Union[str, ElementKind],
        selector: Mapping[str, Any],
        visible_only: bool = True,
        **options: Any,
    ) -> List[F]:
        """Build child fragments from containers found inside this one."""
        return collect_fragments(
            self, fragment_cls, kind, selector,
            visible_only=visible_only, within=self.parent_element, **options
        )

    # --- Form helpers ---

    def settable_fields(self) -> Set[str]:
        """Names of the fields of this class that got a setter."""
        return {d.name for d in type(self)._accessor_registry if has_setter(d.kind)}

    def fill(self, **values: Any) -> None:
        settable = self.settable_fields()
        for name in values:
            if name not in settable:
                raise UnknownFieldError(type(self).__name__, name)
        for name, value in values.items():
            setattr(self, name, value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} parent_element={self.parent_element!r}>"


Fragment._reserved_names = frozenset(dir(Fragment)) | {"page_object", "parent_element"}


def collect_fragments(
    page: IPage,
    fragment_cls: Type[F],
    kind: Union[str, ElementKind],
    selector: Mapping[str, Any],
    visible_only: bool = True,
    within: Optional[IElement] = None,
    **options: Any,
) -> List[F]:
    """
    One fragment per container matched by ``selector``.

    Call again after the page changed (e.g. a block was added) to get the
    current set; fragments never re-acquire their container.
    """
    containers = RESOLVER.resolve_all(page.driver, within, kind, selector)
    fragments = [
        fragment_cls(page_object=page, parent_element=container, **options)
        for container in containers
        if not visible_only or container.is_visible()
    ]
    log.debug("collected %d %s fragment(s) from %d container(s)",
              len(fragments), fragment_cls.__name__, len(containers))
    return fragments
