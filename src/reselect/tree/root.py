"""
Reselect - Root Entry Point

    select = reselect_tree(tree)
    await select(page).homePage().heading().title().expect_chain().to_be_visible()

Chaque appel select(page) puis chaque accès racine repart d'un contexte
neuf: rien n'est partagé ni mis en cache entre deux navigations.
"""

from __future__ import annotations

from functools import partial
from typing import Any, Callable, Iterator, Mapping, Optional

from reselect.common.logging import ensure_logging, get_logger
from reselect.config.settings import ReselectSettings
from reselect.errors import ContractViolationError, MissingSessionError
from reselect.handle.options import ExpectFactory, RuntimeOptions

from .context import SESSION_REQUIRED, root_context
from .navigator import Navigator, build_navigator
from .types import BranchInput, TreeDescription, define_tree

logger = get_logger(__name__)


class TreeRoot:
    """Accès aux noeuds racine pour UNE page: root.homePage() ou root["homePage"]()."""

    def __init__(self, page: Any, description: TreeDescription, options: RuntimeOptions):
        self._page = page
        self._description = description
        self._options = options
        self._accessors = {name: partial(self._enter, name) for name in description}

    def _enter(self, name: str) -> Navigator:
        context = root_context(self._page, self._description, self._options.settings.root_selector)
        return build_navigator(self._description[name], context, (name,), self._options)

    def _lookup(self, name: str) -> Callable[[], Navigator]:
        try:
            return self._accessors[name]
        except KeyError:
            raise ContractViolationError(name, "<tree root>", available=self._accessors) from None

    def __getattr__(self, name: str) -> Callable[[], Navigator]:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._lookup(name)

    def __getitem__(self, name: str) -> Callable[[], Navigator]:
        return self._lookup(name)

    def __contains__(self, name: object) -> bool:
        return name in self._accessors

    def __iter__(self) -> Iterator[str]:
        return iter(self._accessors)

    def __len__(self) -> int:
        return len(self._accessors)

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self._accessors))

    def __repr__(self) -> str:
        return f"<TreeRoot nodes={list(self._accessors)}>"


class TreeSelector:
    """Arbre compilé: fonction page -> TreeRoot."""

    def __init__(self, description: TreeDescription, options: RuntimeOptions):
        self.description = description
        self.options = options

    def __call__(self, page: Any) -> TreeRoot:
        if page is None:
            raise MissingSessionError(SESSION_REQUIRED)
        return TreeRoot(page, self.description, self.options)

    def __repr__(self) -> str:
        return f"<TreeSelector nodes={list(self.description)}>"


def reselect_tree(
    tree: Mapping[str, BranchInput],
    *,
    settings: Optional[ReselectSettings] = None,
    expect_factory: Optional[ExpectFactory] = None,
) -> TreeSelector:
    """
    Compile une description d'arbre.

    Args:
        tree: sortie de define_tree() ou mapping brut (validé ici)
        settings: settings explicites (défaut: get_settings())
        expect_factory: librairie d'assertions (défaut: expect Playwright)

    Returns:
        TreeSelector à appeler avec la page
    """
    options = RuntimeOptions.create(settings=settings, expect_factory=expect_factory)
    ensure_logging(options.settings)
    description = define_tree(tree, settings=options.settings)

    logger.debug(f"[Reselect] Compiled tree: {list(description)}")
    return TreeSelector(description, options)
