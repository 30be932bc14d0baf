"""
@file interfaces.py
@brief Abstract base classes for the browser-driver collaborator.

Defines the element, driver and page interfaces a concrete browser binding
must implement. Generated accessors only ever talk to these.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional, Sequence


class IElement(ABC):
    """
    Abstract element interface for browser interaction.

    One explicit method set covers every element kind; a binding may raise
    for operations that make no sense on the underlying node.
    """

    @property
    @abstractmethod
    def value(self) -> str:
        """Current form value of the element."""
        pass

    @value.setter
    @abstractmethod
    def value(self, value: str) -> None:
        pass

    @property
    @abstractmethod
    def text(self) -> str:
        """Visible text of the element."""
        pass

    @abstractmethod
    def click(self) -> None:
        """Activate the element."""
        pass

    @abstractmethod
    def is_checked(self) -> bool:
        """
        Get checkbox state.

        Returns:
            True if checked, False otherwise
        """
        pass

    @abstractmethod
    def check(self) -> None:
        pass

    @abstractmethod
    def uncheck(self) -> None:
        pass

    @abstractmethod
    def select(self, option: str) -> None:
        """
        Select an option of a select list.

        Args:
            option: Option text or value to match
        """
        pass

    @property
    @abstractmethod
    def options(self) -> Sequence["IElement"]:
        """Options of a select list, in document order."""
        pass

    @abstractmethod
    def exists(self) -> bool:
        """Check if the element is still attached to the document."""
        pass

    @abstractmethod
    def is_visible(self) -> bool:
        pass


class IDriver(ABC):
    """
    Abstract driver interface for element lookup.

    Selectors are opaque key/value mappings handed over unmodified.
    """

    @abstractmethod
    def find(
        self,
        kind: str,
        selector: Mapping[str, Any],
        within: Optional[IElement] = None,
    ) -> IElement:
        """
        Find a single element.

        Args:
            kind: Element kind value ("text_field", "button", ...)
            selector: Locator mapping understood by the binding
            within: Container element to scope the search to; whole
                document when None

        Returns:
            IElement for the matched node

        Raises:
            ResolutionError: No matching element
        """
        pass

    @abstractmethod
    def find_all(
        self,
        kind: str,
        selector: Mapping[str, Any],
        within: Optional[IElement] = None,
    ) -> List[IElement]:
        """
        Find every matching element, in document order.

        Returns:
            Possibly empty list of elements
        """
        pass


class IPage(ABC):
    """Anything that hands out a driver: a page object or an enclosing fragment."""

    @property
    @abstractmethod
    def driver(self) -> IDriver:
        pass
