"""
Shared fixtures: an in-memory driver binding over a tiny fake DOM.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

import pytest

from accessor_core.actionlogger import ACTION_LOGGER
from accessor_core.exceptions import ResolutionError
from accessor_core.interfaces import IDriver, IElement, IPage


def selector_key(kind: str, selector: Mapping[str, Any]) -> Tuple[str, Tuple[Tuple[str, Any], ...]]:
    return kind, tuple(sorted(selector.items()))


class FakeElement(IElement):
    """Element node holding its own state and scoped children."""

    def __init__(
        self,
        value: str = "",
        text: str = "",
        checked: bool = False,
        options: Optional[List["FakeElement"]] = None,
        visible: bool = True,
    ):
        self._value = value
        self._text = text
        self._checked = checked
        self._options = options or []
        self.visible = visible
        self.attached = True
        self.clicks = 0
        self.children: Dict[Any, "FakeElement"] = {}
        self.collections: Dict[Any, List["FakeElement"]] = {}

    def add(self, kind: str, selector: Mapping[str, Any], element: "FakeElement") -> "FakeElement":
        self.children[selector_key(kind, selector)] = element
        return element

    def add_all(self, kind: str, selector: Mapping[str, Any], elements: List["FakeElement"]) -> List["FakeElement"]:
        self.collections[selector_key(kind, selector)] = elements
        return elements

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        self._value = value

    @property
    def text(self) -> str:
        return self._text

    def click(self) -> None:
        self.clicks += 1

    def is_checked(self) -> bool:
        return self._checked

    def check(self) -> None:
        self._checked = True

    def uncheck(self) -> None:
        self._checked = False

    def select(self, option: str) -> None:
        for opt in self._options:
            if option in (opt.text, opt.value):
                self._value = opt.value
                return
        raise ValueError(f"no option {option!r}")

    @property
    def options(self) -> List["FakeElement"]:
        return list(self._options)

    def exists(self) -> bool:
        return self.attached

    def is_visible(self) -> bool:
        return self.visible


def option(text: str, value: Optional[str] = None) -> FakeElement:
    return FakeElement(value=value if value is not None else text, text=text)


class FakeDriver(IDriver):
    def __init__(self) -> None:
        self.document = FakeElement()
        self.calls: List[Tuple[str, Dict[str, Any], Optional[IElement]]] = []
        self.return_none = False

    def find(self, kind, selector, within=None):
        self.calls.append((kind, dict(selector), within))
        if self.return_none:
            return None
        root = within if within is not None else self.document
        try:
            return root.children[selector_key(kind, selector)]
        except KeyError:
            raise ResolutionError("no match", kind=kind, selector=selector) from None

    def find_all(self, kind, selector, within=None):
        root = within if within is not None else self.document
        return list(root.collections.get(selector_key(kind, selector), []))


class FakePage(IPage):
    def __init__(self, driver: FakeDriver):
        self._driver = driver

    @property
    def driver(self) -> FakeDriver:
        return self._driver


@pytest.fixture
def driver():
    return FakeDriver()


@pytest.fixture
def page(driver):
    return FakePage(driver)


@pytest.fixture
def container():
    return FakeElement()


@pytest.fixture
def action_logger():
    """The shared action logger, reset after the test."""
    yield ACTION_LOGGER
    ACTION_LOGGER.reset()
