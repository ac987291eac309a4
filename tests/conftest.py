from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from types import SimpleNamespace
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from reselect.config.settings import ReselectSettings  # noqa: E402


# ========================================
# Fausse page / faux locators
# ========================================

@dataclass
class FakeElement:
    """Élément du faux DOM, indexé par chaîne de sélecteurs."""
    html: str
    text: str = ""
    visible: bool = True


class FakeLocator:
    """Locator immuable: chaque locator() retourne une nouvelle instance."""

    def __init__(self, page: "FakePage", selectors: Tuple[str, ...], index: Optional[int] = None):
        self.page = page
        self.selectors = selectors
        self.index = index

    @property
    def selector(self) -> str:
        return " >> ".join(self.selectors)

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(self.page, self.selectors + (selector,))

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self.page, self.selectors, 0)

    def elements(self) -> List[FakeElement]:
        found = self.page.elements.get(self.selector, [])
        if self.index is not None:
            return found[self.index:self.index + 1]
        return list(found)

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self.page.calls.append(("wait_for", self.selector, state, timeout))
        if state == "visible" and not any(e.visible for e in self.elements()):
            raise TimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector}")

    async def count(self) -> int:
        return len(self.elements())

    async def evaluate_all(self, script: str) -> List[str]:
        self.page.calls.append(("evaluate_all", self.selector, script))
        return [e.html for e in self.elements()]

    async def click(self) -> None:
        self.page.calls.append(("click", self.selector))

    async def text_content(self) -> Optional[str]:
        found = self.elements()
        return found[0].text if found else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FakeLocator):
            return NotImplemented
        return (self.page, self.selectors, self.index) == (other.page, other.selectors, other.index)

    def __hash__(self) -> int:
        return hash((id(self.page), self.selectors, self.index))

    def __repr__(self) -> str:
        return f"<FakeLocator selector={self.selector!r}>"


class FakePage:
    """Session factice: un dict 'chaîne de sélecteurs' -> éléments."""

    def __init__(self, elements: Optional[Dict[str, List[FakeElement]]] = None):
        self.elements: Dict[str, List[FakeElement]] = elements or {}
        self.calls: List[tuple] = []

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, (selector,))

    def add(self, selector: str, html: str, text: str = "", visible: bool = True) -> "FakePage":
        self.elements.setdefault(selector, []).append(FakeElement(html, text, visible))
        return self


# ========================================
# Fausse librairie d'assertions
# ========================================

class FakeAssertions:
    """Sous-ensemble de LocatorAssertions, enregistre chaque appel."""

    default_timeout = 5000  # attribut non appelable

    def __init__(self, locator: FakeLocator, message: Optional[str], log: List[tuple]):
        self._locator = locator
        self._message = message
        self._log = log

    def _text(self) -> str:
        return " ".join(e.text for e in self._locator.elements())

    async def to_be_visible(self, timeout: Optional[float] = None) -> None:
        self._log.append(("to_be_visible", self._locator.selector, timeout))
        if not any(e.visible for e in self._locator.elements()):
            raise AssertionError(self._message or f"{self._locator.selector} is not visible")

    async def not_to_be_visible(self, timeout: Optional[float] = None) -> None:
        self._log.append(("not_to_be_visible", self._locator.selector, timeout))
        if any(e.visible for e in self._locator.elements()):
            raise AssertionError(self._message or f"{self._locator.selector} is visible")

    async def to_have_text(self, expected: Any, timeout: Optional[float] = None) -> None:
        self._log.append(("to_have_text", self._locator.selector, expected))
        text = self._text()
        matched = expected.search(text) if isinstance(expected, re.Pattern) else text == expected
        if not matched:
            raise AssertionError(self._message or f"expected {expected!r}, got {text!r}")

    async def to_contain_text(self, expected: str, timeout: Optional[float] = None) -> None:
        self._log.append(("to_contain_text", self._locator.selector, expected))
        if expected not in self._text():
            raise AssertionError(self._message or f"{expected!r} not in {self._text()!r}")

    def to_have_count_sync(self, expected: int) -> None:
        self._log.append(("to_have_count_sync", self._locator.selector, expected))
        assert len(self._locator.elements()) == expected


# ========================================
# Builders
# ========================================

def narrow(selector: str) -> Callable[[Any], None]:
    """build(): restreint le locator courant."""
    def build(ctx) -> None:
        ctx.locator = ctx.locator.locator(selector)
    return build


def from_page(selector: str) -> Callable[[Any], None]:
    """build(): repart de la page."""
    def build(ctx) -> None:
        ctx.locator = ctx.page.locator(selector)
    return build


class BuildCounter:
    """Compte les appels build() par nom de noeud."""

    def __init__(self):
        self.calls: List[str] = []

    def wrap(self, name: str, build: Callable[[Any], None]) -> Callable[[Any], None]:
        def counted(ctx) -> None:
            self.calls.append(name)
            build(ctx)
        return counted


# ========================================
# Fixtures
# ========================================

@pytest.fixture
def settings() -> ReselectSettings:
    """Settings isolés de l'environnement."""
    return ReselectSettings(debug_timeout_ms=1000, inspect_log_level="INFO")


@pytest.fixture
def assertion_log() -> List[tuple]:
    return []


@pytest.fixture
def fake_expect(assertion_log: List[tuple]) -> Callable[..., FakeAssertions]:
    def factory(locator: FakeLocator, message: Optional[str] = None) -> FakeAssertions:
        return FakeAssertions(locator, message, assertion_log)
    return factory


@pytest.fixture
def page() -> FakePage:
    """
    <div>
      <header><h1>Title</h1></header>
      <footer><p>Footer</p></footer>
    </div>
    """
    return (
        FakePage()
        .add("div", "<div><header><h1>Title</h1></header><footer><p>Footer</p></footer></div>", "Title Footer")
        .add("div >> header", "<header><h1>Title</h1></header>", "Title")
        .add("div >> header >> h1", "<h1>Title</h1>", "Title")
        .add("div >> footer", "<footer><p>Footer</p></footer>", "Footer")
        .add("div >> footer >> p", "<p>Footer</p>", "Footer")
        .add("div >> ul >> #a", '<li id="a">A</li>', "A")
        .add("div >> ul >> #b", '<li id="b">B</li>', "B")
        .add("div >> ul", '<ul><li id="a">A</li><li id="b">B</li></ul>', "A B")
    )


@pytest.fixture
def page_tree() -> Dict[str, Any]:
    """Arbre brut: root > header(headerTitle: title) / footer(text: footerText) / list."""
    return {
        "root": {
            "build": from_page("div"),
            "children": {
                "header": {
                    "alias": "pageHeading",
                    "build": narrow("header"),
                    "children": {
                        "title": {"alias": "headerTitle", "build": narrow("h1")},
                    },
                },
                "footer": {
                    "build": narrow("footer"),
                    "children": {
                        "text": {"alias": "footerText", "build": narrow("p")},
                    },
                },
                "list": {
                    "alias": "itemList",
                    "build": narrow("ul"),
                    "custom": {
                        "get_item_by_id": lambda ctx, item_id: ctx.locator.locator(f"#{item_id}"),
                    },
                },
            },
        },
    }


@pytest.fixture
def select(page_tree, settings, fake_expect):
    from reselect import reselect_tree

    return reselect_tree(page_tree, settings=settings, expect_factory=fake_expect)


@pytest.fixture
def builders():
    """Helpers build() exposés aux modules de test (narrow, from_page)."""
    return SimpleNamespace(narrow=narrow, from_page=from_page)


@pytest.fixture
def build_counter() -> BuildCounter:
    return BuildCounter()


@pytest.fixture
def blank_page() -> FakePage:
    return FakePage()
