from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from playwright.async_api import expect as playwright_expect

from reselect.config.settings import ReselectSettings, get_settings

# (locator, message) -> objet d'assertions (LocatorAssertions chez Playwright)
ExpectFactory = Callable[..., Any]


@dataclass(frozen=True)
class RuntimeOptions:
    """Réglages partagés par tous les navigateurs d'un même arbre compilé."""
    settings: ReselectSettings = field(default_factory=get_settings)
    expect_factory: ExpectFactory = playwright_expect

    @classmethod
    def create(
        cls,
        settings: Optional[ReselectSettings] = None,
        expect_factory: Optional[ExpectFactory] = None,
    ) -> RuntimeOptions:
        return cls(
            settings=settings or get_settings(),
            expect_factory=expect_factory or playwright_expect,
        )
