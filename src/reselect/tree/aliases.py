"""
Reselect - Alias Indexer

Découverte des alias déclarés SOUS un noeud (descendants stricts) et
table de sauts exposée par Navigator.skip_to_alias().

Une route est la suite des noms d'enfants depuis le noeud indexé jusqu'au
noeud aliasé. Un saut rejoue toujours la marche complète: aucune route
ni aucun handle n'est mis en cache entre deux appels.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, Mapping, Tuple

from reselect.errors import ContractViolationError, DuplicateAliasError, format_route

if TYPE_CHECKING:
    from .types import NodeSpec

Route = Tuple[str, ...]


def _visit(children: Mapping[str, NodeSpec], prefix: Route, routes: Dict[str, Route]) -> None:
    for name, child in children.items():
        route = prefix + (name,)
        if child.alias is not None:
            if child.alias in routes:
                raise DuplicateAliasError(child.alias, routes[child.alias], route)
            routes[child.alias] = route
        # Un noeud aliasé peut lui-même contenir des alias plus profonds
        _visit(child.children, route, routes)


def collect_alias_routes(spec: NodeSpec) -> Dict[str, Route]:
    """
    Indexe les alias des descendants stricts de `spec`.

    Args:
        spec: noeud indexé (son propre alias n'est jamais inclus)

    Returns:
        Dict alias -> route, dans l'ordre de déclaration (profondeur d'abord)

    Raises:
        DuplicateAliasError: deux descendants déclarent le même alias
    """
    routes: Dict[str, Route] = {}
    _visit(spec.children, (), routes)
    return routes


def collect_tree_aliases(tree: Mapping[str, NodeSpec]) -> Dict[str, Route]:
    """Variante stricte: alias de TOUT l'arbre, noeuds racine compris."""
    routes: Dict[str, Route] = {}
    _visit(tree, (), routes)
    return routes


class AliasTable:
    """
    Table de sauts alias -> () -> Navigator.

    Accès par attribut (table.pageHeading()) ou par clé
    (table["pageHeading"]()). Pas de méthode publique: tout nom d'alias
    valide reste accessible par attribut.
    """

    def __init__(
        self,
        routes: Mapping[str, Route],
        jump: Callable[[Route], Any],
        owner: str,
    ):
        self._routes = dict(routes)
        self._owner = owner
        self._jumps = {alias: partial(jump, route) for alias, route in self._routes.items()}

    def _lookup(self, alias: str) -> Callable[[], Any]:
        try:
            return self._jumps[alias]
        except KeyError:
            raise ContractViolationError(
                alias,
                f"{self._owner}.skip_to_alias()",
                available=self._jumps,
                reason=f"'{self._owner}' has no descendant alias '{alias}'",
            ) from None

    def __getattr__(self, name: str) -> Callable[[], Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._lookup(name)

    def __getitem__(self, alias: str) -> Callable[[], Any]:
        return self._lookup(alias)

    def __contains__(self, alias: object) -> bool:
        return alias in self._jumps

    def __iter__(self) -> Iterator[str]:
        return iter(self._jumps)

    def __len__(self) -> int:
        return len(self._jumps)

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self._jumps))

    def __repr__(self) -> str:
        entries = ", ".join(
            f"{alias} -> {format_route(route)}" for alias, route in self._routes.items()
        )
        return f"<AliasTable {self._owner}: {entries or 'empty'}>"
