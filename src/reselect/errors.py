"""
Reselect - Exceptions

Hiérarchie des erreurs levées par le compilateur d'arbre.

- ConfigurationError: définition invalide (arbre, alias, session absente)
- ContractViolationError: capacité non déclarée invoquée sur un navigateur
  ou un handle terminal

Les erreurs d'état de la cible (timeouts Playwright, AssertionError) ne
sont PAS encapsulées: elles remontent telles quelles jusqu'au test.
"""

from typing import Iterable, Optional, Sequence


class ReselectError(Exception):
    """Erreur de base du package."""
    pass


class ConfigurationError(ReselectError):
    """Définition d'arbre ou configuration runtime invalide."""
    pass


class DuplicateAliasError(ConfigurationError):
    """Deux descendants exposent le même alias dans un même scope."""

    def __init__(self, alias: str, first_route: Sequence[str], second_route: Sequence[str]):
        self.alias = alias
        self.routes = tuple(sorted([tuple(first_route), tuple(second_route)]))
        super().__init__(
            f"alias '{alias}' is declared twice in the same scope: "
            f"{format_route(self.routes[0])} and {format_route(self.routes[1])}"
        )


class MissingSessionError(ConfigurationError):
    """Aucune page (session) fournie au sélecteur."""
    pass


class ContractViolationError(ReselectError, AttributeError):
    """
    Capacité invoquée alors qu'elle n'est pas déclarée pour le receveur.

    Hérite d'AttributeError: hasattr() et getattr(obj, name, default)
    gardent leur sémantique Python habituelle.
    """

    def __init__(
        self,
        capability: str,
        receiver: str,
        available: Optional[Iterable[str]] = None,
        reason: Optional[str] = None,
    ):
        self.capability = capability
        self.receiver = receiver
        self.available = tuple(sorted(available)) if available is not None else ()

        message = reason or f"'{receiver}' has no capability '{capability}'"
        if available is not None:
            listed = ", ".join(self.available) if self.available else "none"
            message = f"{message} (available: {listed})"
        super().__init__(message)


def format_route(route: Sequence[str]) -> str:
    """Formate une route de navigation: ('a', 'b') -> 'a > b'."""
    return " > ".join(route) if route else "<self>"
