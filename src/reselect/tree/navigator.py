"""
Reselect - Navigator Factory

Construit, à la demande, le navigateur d'un noeud:

    Navigator
    ├── get()            -> DecoratedHandle (terminal)
    ├── <enfant>()       -> Navigator (récursion paresseuse)
    ├── <custom>(*args)  -> DecoratedHandle (terminal)
    ├── skip_to_alias()  -> AliasTable (descendants stricts)
    ├── inspect()        -> même Navigator (trace en log)
    ├── debug()          -> get().debug()
    └── expect_chain()   -> get().expect_chain()

La forme d'un navigateur dépend UNIQUEMENT de son NodeSpec: tout nom non
déclaré lève ContractViolationError au point d'usage.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Callable, Dict, Optional, Tuple

from reselect.common.logging import get_logger
from reselect.errors import ContractViolationError, format_route
from reselect.handle.decorated import DecoratedHandle, decorate_handle
from reselect.handle.deferred import Deferred
from reselect.handle.expect_chain import ExpectChain
from reselect.handle.options import RuntimeOptions

from .aliases import AliasTable, Route, collect_alias_routes
from .context import Context, fork, propagate
from .types import RESERVED_NAMES, NodeSpec

logger = get_logger(__name__)

Path = Tuple[str, ...]


def call_label(name: str, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> str:
    """Libellé d'un appel custom: getButtonByType('star')."""
    parts = [repr(arg) for arg in args]
    parts.extend(f"{key}={value!r}" for key, value in kwargs.items())
    return f"{name}({', '.join(parts)})"


def build_navigator(
    spec: NodeSpec,
    inbound: Context,
    path: Path,
    options: RuntimeOptions,
) -> Navigator:
    """
    Applique build() du noeud puis compose son navigateur.

    Args:
        spec: noeud à construire
        inbound: contexte sortant du parent (copié, jamais modifié)
        path: chemin de navigation jusqu'à ce noeud inclus
        options: settings + librairie d'assertions de l'arbre compilé
    """
    context = propagate(inbound, spec, format_route(path))
    return Navigator(spec, context, path, options)


class Navigator:
    """Position de l'arbre, construite par appel (jamais mise en cache)."""

    def __init__(self, spec: NodeSpec, context: Context, path: Path, options: RuntimeOptions):
        self._spec = spec
        self._context = context
        self._path = path
        self._options = options

        self._children: Dict[str, Callable[[], Navigator]] = {
            name: partial(self._child, name) for name in spec.children
        }
        self._custom: Dict[str, Callable[..., DecoratedHandle]] = {
            name: self._custom_accessor(name) for name in spec.custom
        }

    # === Navigation ===

    def _child(self, name: str) -> Navigator:
        return build_navigator(self._spec.children[name], self._context, self._path + (name,), self._options)

    def _custom_accessor(self, name: str) -> Callable[..., DecoratedHandle]:
        fn = self._spec.custom[name]

        def accessor(*args: Any, **kwargs: Any) -> DecoratedHandle:
            label = call_label(name, args, kwargs)
            # Copie: une capacité custom ne peut pas altérer le contexte du noeud
            locator = fn(fork(self._context), *args, **kwargs)
            if locator is None:
                raise ContractViolationError(
                    name,
                    format_route(self._path),
                    reason=f"custom '{label}' of '{format_route(self._path)}' returned None; it must return a handle",
                )
            return decorate_handle(locator, self._path + (label,), self._options, self._declared())

        accessor.__name__ = name
        accessor.__doc__ = fn.__doc__
        return accessor

    def _jump(self, route: Route) -> Navigator:
        # Rejoue la marche complète depuis ce noeud, aucun raccourci
        navigator = self
        for name in route:
            navigator = navigator._child(name)
        return navigator

    def _declared(self) -> frozenset:
        return frozenset(self._children) | frozenset(self._custom)

    # === Opérations fixes ===

    def get(self) -> DecoratedHandle:
        """Résout le handle du noeud (terminal)."""
        return decorate_handle(self._context.locator, self._path, self._options, self._declared())

    def skip_to_alias(self) -> AliasTable:
        """Table de sauts vers les descendants aliasés, recalculée à chaque appel."""
        routes = collect_alias_routes(self._spec)
        return AliasTable(routes, self._jump, format_route(self._path))

    def inspect(self) -> Navigator:
        """Trace la position courante dans les logs et retourne ce même navigateur."""
        level = logging.getLevelName(self._options.settings.inspect_log_level)
        summary = self._spec.describe()
        logger.log(
            level,
            f"[INSPECT] {format_route(self._path)} -> {self._context.locator!r} "
            f"children={summary['children']} custom={summary['custom']} aliases={summary['aliases']}",
            extra={"reselect_path": self._path, "reselect_node": summary},
        )
        return self

    def debug(self, timeout: Optional[float] = None) -> Deferred[str]:
        return self.get().debug(timeout)

    def expect_chain(self, message: Optional[str] = None) -> ExpectChain:
        return self.get().expect_chain(message)

    # === Accès dynamique ===

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._children:
            return self._children[name]
        if name in self._custom:
            return self._custom[name]
        raise ContractViolationError(
            name,
            format_route(self._path),
            available=self._declared() | RESERVED_NAMES,
        )

    def __dir__(self):
        return sorted(set(super().__dir__()) | self._declared())

    def __repr__(self) -> str:
        return (
            f"<Navigator {format_route(self._path)} "
            f"children={list(self._children)} custom={list(self._custom)}>"
        )
