# accessor_core/compiler.py
"""
@file compiler.py
@brief Expands field descriptors into generated accessor attributes.

Each ElementKind maps to a fixed operation bundle (see kinds.KIND_TEMPLATES).
Every generated operation resolves its element through the owning
fragment on each call and performs exactly one driver call.
"""

from __future__ import annotations
import functools
import logging
import time
from typing import Any, Callable, Dict, Iterable, List, Optional

from .actionlogger import ACTION_LOGGER
from .exceptions import DuplicateFieldError, ResolutionError
from .kinds import Operation, operations_for
from .registry import FieldDescriptor

log = logging.getLogger("accessor_core")

# Attribute name generated for each operation, formatted with the field name.
ATTRIBUTE_PATTERNS: Dict[Operation, str] = {
    Operation.GET_VALUE: "{name}",
    Operation.SET_VALUE: "{name}",
    Operation.GET_TEXT: "{name}",
    Operation.GET_CHECKED: "{name}",
    Operation.SET_CHECKED: "{name}",
    Operation.GET_SELECTED: "{name}",
    Operation.SELECT: "{name}",
    Operation.TRIGGER: "{name}",
    Operation.CHECK: "check_{name}",
    Operation.UNCHECK: "uncheck_{name}",
    Operation.CHECKED_ALIAS: "{name}_checked",
    Operation.LIST_OPTIONS: "{name}_options",
    Operation.GET_ELEMENT: "{name}_element",
    Operation.EXISTS: "{name}_exists",
}

_GETTERS = {Operation.GET_VALUE, Operation.GET_TEXT, Operation.GET_CHECKED, Operation.GET_SELECTED}
_SETTERS = {Operation.SET_VALUE, Operation.SET_CHECKED, Operation.SELECT}


def _logged(op: Operation, descriptor: FieldDescriptor, func: Callable[..., Any]) -> Callable[..., Any]:
    """Emit an action event after ``func`` returns. Failures are only propagated."""

    @functools.wraps(func)
    def wrapper(self, *args):
        if not ACTION_LOGGER.is_enabled():
            return func(self, *args)
        start = time.perf_counter()
        result = func(self, *args)
        duration_ms = int((time.perf_counter() - start) * 1000)
        ACTION_LOGGER.record(op, descriptor, type(self).__name__, duration_ms, *args)
        return result

    return wrapper


def _accessor_field(value: Any) -> Optional[str]:
    """Field name behind a generated attribute, None for anything else."""
    if isinstance(value, property):
        value = value.fget or value.fset
    return getattr(value, "_accessor_field", None)


def _build_operation(op: Operation, d: FieldDescriptor) -> Callable[..., Any]:
    def element(self):
        return self._resolve_descriptor(d)

    if op is Operation.GET_ELEMENT:
        return element

    if op is Operation.EXISTS:
        def exists(self) -> bool:
            try:
                return bool(element(self).exists())
            except ResolutionError:
                return False
        return exists

    if op is Operation.GET_VALUE or op is Operation.GET_SELECTED:
        def get_value(self):
            return element(self).value
        return get_value

    if op is Operation.SET_VALUE:
        def set_value(self, value):
            element(self).value = str(value)
        return set_value

    if op is Operation.GET_TEXT:
        def get_text(self):
            return element(self).text
        return get_text

    if op is Operation.TRIGGER:
        def trigger(self) -> None:
            element(self).click()
        return trigger

    if op is Operation.GET_CHECKED or op is Operation.CHECKED_ALIAS:
        def is_checked(self) -> bool:
            return bool(element(self).is_checked())
        return is_checked

    if op is Operation.SET_CHECKED:
        def set_checked(self, value) -> None:
            target = element(self)
            if value:
                target.check()
            else:
                target.uncheck()
        return set_checked

    if op is Operation.CHECK:
        def check(self) -> None:
            element(self).check()
        return check

    if op is Operation.UNCHECK:
        def uncheck(self) -> None:
            element(self).uncheck()
        return uncheck

    if op is Operation.SELECT:
        def select(self, value) -> None:
            element(self).select(str(value))
        return select

    if op is Operation.LIST_OPTIONS:
        def options(self) -> List[str]:
            return [option.text for option in element(self).options]
        return options

    raise ValueError(f"No builder for operation: {op}")


class AccessorCompiler:
    """
    Turns one FieldDescriptor into a name-indexed bundle of class attributes:
    properties for the value side, plain methods for everything else.
    """

    def attribute_names(self, descriptor: FieldDescriptor) -> Dict[Operation, str]:
        return {
            op: ATTRIBUTE_PATTERNS[op].format(name=descriptor.name)
            for op in operations_for(descriptor.kind)
        }

    def compile(self, descriptor: FieldDescriptor) -> Dict[str, Any]:
        getters: Dict[str, Callable[..., Any]] = {}
        setters: Dict[str, Callable[..., Any]] = {}
        methods: Dict[str, Callable[..., Any]] = {}

        for op, attr in self.attribute_names(descriptor).items():
            func = _logged(op, descriptor, _build_operation(op, descriptor))
            func.__name__ = attr
            func.__doc__ = f"{op.value} for {descriptor.kind.value} '{descriptor.name}'"
            func._accessor_field = descriptor.name
            if op in _GETTERS:
                getters[attr] = func
            elif op in _SETTERS:
                setters[attr] = func
            else:
                methods[attr] = func

        compiled: Dict[str, Any] = dict(methods)
        for attr in sorted(set(getters) | set(setters)):
            compiled[attr] = property(
                getters.get(attr),
                setters.get(attr),
                doc=f"{descriptor.kind.value} '{descriptor.name}'",
            )
        return compiled

    def install(
        self,
        cls: type,
        descriptor: FieldDescriptor,
        reserved: Iterable[str] = (),
    ) -> List[str]:
        """
        Attach the compiled attributes to ``cls``.

        Nothing is attached unless every generated name is free. Shadowing
        an accessor inherited from another field is allowed but logged as a
        warning.

        Raises:
            DuplicateFieldError: A generated attribute already exists on
                ``cls`` itself or is a reserved base-class name
        """
        compiled = self.compile(descriptor)
        reserved = set(reserved)
        for attr in compiled:
            if attr in reserved or attr in cls.__dict__:
                raise DuplicateFieldError(cls.__name__, descriptor.name, attribute=attr)

        for attr, value in compiled.items():
            inherited = _accessor_field(getattr(cls, attr, None))
            if inherited is not None and inherited != descriptor.name:
                log.warning("%s.%s: generated attribute %r shadows the accessor of inherited field %r",
                            cls.__name__, descriptor.name, attr, inherited)
            if callable(value):
                value.__qualname__ = f"{cls.__qualname__}.{attr}"
            setattr(cls, attr, value)
        log.debug("compiled %s.%s -> %s", cls.__name__, descriptor.name, sorted(compiled))
        return sorted(compiled)


COMPILER = AccessorCompiler()
