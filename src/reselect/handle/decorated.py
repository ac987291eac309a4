"""
Reselect - Terminal Handle Decorator

Handle résolu (retour de get() et des capacités custom):
- toutes les opérations natives du Locator passent telles quelles
- debug(): rapport textuel (chemin + snapshot HTML)
- expect_chain(): chaîne d'assertions sur ce handle

Un Locator Playwright est décoré en sous-classe de Locator (DecoratedLocator),
tout autre handle par un simple proxy (DecoratedHandle).

C'est un cul-de-sac: aucune navigation (enfant, custom, alias) n'y est
disponible.
"""

from __future__ import annotations

from functools import partial
from typing import Any, FrozenSet, Iterable, Optional, Sequence, Tuple

from playwright.async_api import Locator

from reselect.common.logging import get_logger
from reselect.common.markup import format_markup
from reselect.config.settings import ReselectSettings
from reselect.errors import ContractViolationError, format_route

from .deferred import Deferred
from .expect_chain import ExpectChain
from .options import RuntimeOptions

logger = get_logger(__name__)

OUTER_HTML_SCRIPT = "elements => elements.map(element => element.outerHTML)"

# Opérations de navigation, jamais disponibles sur un handle
NAVIGATION_NAMES = frozenset({"get", "inspect", "skip_to_alias"})


def render_debug_report(
    path: Sequence[str],
    locator: Any,
    count: int,
    fragments: Iterable[str],
) -> str:
    """Assemble le rapport debug (déterministe pour un état de page stable)."""
    lines = [
        f"[DEBUG] {format_route(path)}",
        f"handle: {locator!r}",
        f"matches: {count}",
    ]
    for fragment in fragments:
        formatted = format_markup(fragment)
        if formatted:
            lines.append(formatted)
    return "\n".join(lines) + "\n"


async def capture_debug_report(
    locator: Any,
    path: Sequence[str],
    settings: ReselectSettings,
    timeout: Optional[float] = None,
) -> str:
    """
    Attend le handle puis capture son état courant.

    Args:
        locator: handle brut
        path: chemin de navigation ayant produit le handle
        settings: état d'attente + timeout par défaut
        timeout: timeout explicite (ms), prioritaire sur les settings

    Returns:
        Le rapport, aussi émis sur le logger reselect.handle.decorated

    Raises:
        Erreurs de la cible (TimeoutError Playwright) propagées telles quelles
    """
    wait_timeout = settings.debug_timeout_ms if timeout is None else timeout
    await locator.first.wait_for(state=settings.debug_wait_state, timeout=wait_timeout)

    count = await locator.count()
    fragments = await locator.evaluate_all(OUTER_HTML_SCRIPT)

    report = render_debug_report(path, locator, count, fragments)
    logger.info(report)
    return report


class DecoratedHandle:
    """
    Handle enrichi de debug() et expect_chain().

    Les opérations natives du handle passent en priorité, même quand un
    enfant ou une capacité custom du noeud d'origine porte le même nom.
    `raw` donne le handle d'origine, non décoré.
    """

    def __init__(
        self,
        locator: Any,
        path: Tuple[str, ...],
        options: RuntimeOptions,
        declared: Iterable[str] = (),
    ):
        self._locator = locator
        self._path = path
        self._options = options
        self._declared: FrozenSet[str] = frozenset(declared)

    @property
    def raw(self) -> Any:
        return self._locator

    def debug(self, timeout: Optional[float] = None) -> Deferred[str]:
        return Deferred(
            partial(capture_debug_report, self._locator, self._path, self._options.settings, timeout),
            label=f"{format_route(self._path)}.debug",
        )

    def expect_chain(self, message: Optional[str] = None) -> ExpectChain:
        return ExpectChain(self._locator, self._path, self._options, message)

    def _dead_end(self, name: str, receiver: str) -> ContractViolationError:
        return ContractViolationError(
            name,
            receiver,
            reason=f"'{receiver}' is a resolved handle: '{name}' is not available after resolution",
        )

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)

        receiver = f"{format_route(self._path)}.get()"
        if name in NAVIGATION_NAMES:
            raise self._dead_end(name, receiver)
        try:
            return getattr(self._locator, name)
        except AttributeError:
            if name in self._declared:
                raise self._dead_end(name, receiver) from None
            raise ContractViolationError(
                name,
                receiver,
                reason=f"'{receiver}' has no capability '{name}' (not a handle operation)",
            ) from None

    def __dir__(self):
        native = (name for name in dir(self._locator) if not name.startswith("_"))
        return sorted((set(super().__dir__()) | set(native)) - NAVIGATION_NAMES)

    def __repr__(self) -> str:
        return f"<DecoratedHandle {format_route(self._path)}: {self._locator!r}>"


class DecoratedLocator(DecoratedHandle, Locator):
    """
    Variante Playwright: un vrai Locator (même objet d'implémentation).

    Accepté partout où Playwright attend un Locator, ex:
    await expect(node.get()).to_have_text("Docs").
    """

    def __init__(
        self,
        locator: Locator,
        path: Tuple[str, ...],
        options: RuntimeOptions,
        declared: Iterable[str] = (),
    ):
        DecoratedHandle.__init__(self, locator, path, options, declared)
        Locator.__init__(self, locator._impl_obj)

    def __repr__(self) -> str:
        return f"<DecoratedLocator {format_route(self._path)}: {self._locator!r}>"


def decorate_handle(
    locator: Any,
    path: Tuple[str, ...],
    options: RuntimeOptions,
    declared: Iterable[str] = (),
) -> DecoratedHandle:
    """
    Décore un handle résolu.

    Args:
        locator: handle brut (Locator Playwright ou équivalent)
        path: chemin de navigation ayant produit le handle
        options: settings + librairie d'assertions
        declared: enfants et customs du noeud d'origine (cul-de-sac s'ils
            ne sont pas des opérations natives)
    """
    if isinstance(locator, Locator):
        return DecoratedLocator(locator, path, options, declared)
    return DecoratedHandle(locator, path, options, declared)
