"""
Reselect - Context Propagator

Le contexte {page, locator, description} est copié à chaque saut AVANT
l'appel à build(): deux branches ne partagent jamais la même instance,
un build() d'une branche ne peut donc pas corrompre un navigateur déjà
construit ailleurs.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Mapping

from reselect.common.logging import get_logger
from reselect.errors import ContractViolationError, MissingSessionError

if TYPE_CHECKING:
    from .types import NodeSpec

logger = get_logger(__name__)

SESSION_REQUIRED = "page is required: pass a Playwright Page to the tree selector"


@dataclass
class Context:
    """
    Contexte de traversée, une instance par étape.

    page: session (Page Playwright), opaque pour le compilateur
    locator: handle courant, réassigné par build()
    description: arbre complet d'origine
    """
    page: Any
    locator: Any
    description: Mapping[str, NodeSpec]


def root_context(page: Any, description: Mapping[str, NodeSpec], root_selector: str = ":root") -> Context:
    """Contexte initial: locator positionné sur `root_selector` de la page."""
    if page is None:
        raise MissingSessionError(SESSION_REQUIRED)
    return Context(page=page, locator=page.locator(root_selector), description=description)


def fork(context: Context) -> Context:
    """Copie valeur du contexte (les locators Playwright sont immuables)."""
    return replace(context)


def propagate(inbound: Context, spec: NodeSpec, label: str = "<node>") -> Context:
    """
    Produit le contexte sortant d'un noeud.

    Args:
        inbound: contexte du parent (jamais modifié)
        spec: noeud dont on applique build()
        label: position lisible du noeud, pour les messages d'erreur

    Returns:
        Nouveau contexte, locator réassigné par build()
    """
    if inbound.page is None:
        raise MissingSessionError(SESSION_REQUIRED)

    outbound = fork(inbound)
    returned = spec.build(outbound)
    if returned is not None:
        raise ContractViolationError(
            "build",
            label,
            reason=(
                f"build() of '{label}' returned a {type(returned).__name__}; "
                "it must assign ctx.locator and return None"
            ),
        )

    logger.debug(f"[Context] {label}: {outbound.locator!r}")
    return outbound
