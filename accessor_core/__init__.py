# accessor_core/__init__.py
"""
Accessor Core - declarative accessors for page-object fragments.

This package provides:
- Fields: class-body declarations, one helper per element kind
- Registry: per-class field name -> descriptor map
- Compiler: per-kind operation templates turned into properties/methods
- Resolver: scoped element lookup through a browser-driver binding
- Fragment: base class for repeated page regions, nestable
- ObjectMap: Fragment classes built from YAML object maps
- Interfaces: abstract base classes for driver bindings
"""

from accessor_core.exceptions import (
    AccessorError,
    ConfigError,
    DuplicateFieldError,
    UnknownFieldError,
    ConstructionError,
    ResolutionError,
)
from accessor_core.kinds import ElementKind, Operation, KIND_TEMPLATES, operations_for
from accessor_core.registry import AccessorRegistry, FieldDescriptor
from accessor_core.compiler import AccessorCompiler
from accessor_core.resolver import ScopedResolver
from accessor_core.fragment import Fragment, collect_fragments
from accessor_core.object_map import ObjectMap, load_object_map
from accessor_core.interfaces import IDriver, IElement, IPage
from accessor_core.actionlogger import ACTION_LOGGER
from accessor_core import fields

__all__ = [
    "AccessorError",
    "ConfigError",
    "DuplicateFieldError",
    "UnknownFieldError",
    "ConstructionError",
    "ResolutionError",
    "ElementKind",
    "Operation",
    "KIND_TEMPLATES",
    "operations_for",
    "AccessorRegistry",
    "FieldDescriptor",
    "AccessorCompiler",
    "ScopedResolver",
    "Fragment",
    "collect_fragments",
    "ObjectMap",
    "load_object_map",
    "IDriver",
    "IElement",
    "IPage",
    "ACTION_LOGGER",
    "fields",
]

__version__ = "1.0.0"
