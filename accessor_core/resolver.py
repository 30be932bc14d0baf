# accessor_core/resolver.py
"""
@file resolver.py
@brief Resolves declared fields to live elements inside a container element.
"""

from __future__ import annotations
import logging
from typing import Any, List, Mapping, Optional, Union

from .exceptions import ResolutionError
from .interfaces import IDriver, IElement
from .kinds import ElementKind

log = logging.getLogger("accessor_core")


class ScopedResolver:
    """
    Combines a container element with a selector and asks the driver for
    the matching node. Holds no state and caches nothing, so every call
    reflects the current document.
    """

    def resolve(
        self,
        driver: IDriver,
        container: Optional[IElement],
        kind: Union[str, ElementKind],
        selector: Mapping[str, Any],
        field_name: Optional[str] = None,
    ) -> IElement:
        kind_value = ElementKind.coerce(kind).value
        log.debug("resolve field=%s kind=%s selector=%s scoped=%s",
                  field_name, kind_value, dict(selector), container is not None)
        element = driver.find(kind_value, selector, within=container)
        if element is None:
            raise ResolutionError(
                "driver returned no element",
                field_name=field_name,
                kind=kind_value,
                selector=selector,
            )
        return element

    def resolve_all(
        self,
        driver: IDriver,
        container: Optional[IElement],
        kind: Union[str, ElementKind],
        selector: Mapping[str, Any],
    ) -> List[IElement]:
        kind_value = ElementKind.coerce(kind).value
        elements = driver.find_all(kind_value, selector, within=container)
        log.debug("resolve_all kind=%s selector=%s found=%d", kind_value, dict(selector), len(elements or []))
        return list(elements or [])


RESOLVER = ScopedResolver()
