"""
Reselect - Types

Modèle de description d'arbre: NodeSpec + helpers de définition.

Un NodeSpec décrit UNE position de l'arbre:
- build: fonction (ctx) -> None qui réassigne ctx.locator
- children: noeuds enfants nommés
- custom: capacités terminales (ctx, *args) -> Locator
- alias: nom de raccourci exposé par skip_to_alias() des ancêtres

Toute la validation se fait à la définition (pas au premier usage).
"""

from __future__ import annotations

import keyword
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from reselect.config.settings import ReselectSettings, get_settings
from reselect.errors import ConfigurationError

from .aliases import collect_alias_routes, collect_tree_aliases


# Opérations fixes d'un navigateur: un enfant / custom ne peut pas les masquer
RESERVED_NAMES = frozenset({"get", "inspect", "debug", "expect_chain", "skip_to_alias"})

# build: (ctx: Context) -> None
BuildFn = Callable[..., Any]
# custom: (ctx: Context, *args, **kwargs) -> Locator
CustomFn = Callable[..., Any]


def check_name(name: Any, kind: str) -> str:
    """Valide un nom accessible par attribut (enfant, custom, alias, racine)."""
    if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
        raise ConfigurationError(f"invalid {kind} name {name!r}: must be a Python identifier")
    if name.startswith("_"):
        raise ConfigurationError(f"invalid {kind} name {name!r}: must not start with '_'")
    if kind != "alias" and name in RESERVED_NAMES:
        raise ConfigurationError(
            f"invalid {kind} name {name!r}: reserved navigator operation "
            f"({', '.join(sorted(RESERVED_NAMES))})"
        )
    return name


class NodeSpec(BaseModel):
    """
    Description statique d'un noeud.

    Immuable une fois construit. Les dicts imbriqués dans `children`
    sont validés récursivement en NodeSpec.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    build: BuildFn
    children: Dict[str, NodeSpec] = Field(default_factory=dict)
    custom: Dict[str, CustomFn] = Field(default_factory=dict)
    alias: Optional[str] = None

    @field_validator("children")
    @classmethod
    def _check_children_names(cls, value: Dict[str, NodeSpec]) -> Dict[str, NodeSpec]:
        for name in value:
            check_name(name, "child")
        return value

    @field_validator("custom")
    @classmethod
    def _check_custom_names(cls, value: Dict[str, CustomFn]) -> Dict[str, CustomFn]:
        for name in value:
            check_name(name, "custom")
        return value

    @field_validator("alias")
    @classmethod
    def _check_alias(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            check_name(value, "alias")
        return value

    @model_validator(mode="after")
    def _check_scope(self) -> NodeSpec:
        overlap = sorted(set(self.children) & set(self.custom))
        if overlap:
            raise ConfigurationError(
                f"names declared both as child and custom: {', '.join(overlap)}"
            )
        # Lève DuplicateAliasError si deux descendants partagent un alias
        collect_alias_routes(self)
        return self

    def describe(self) -> Dict[str, Any]:
        """Résumé sérialisable (noms uniquement), utilisé par inspect()."""
        return {
            "children": list(self.children),
            "custom": list(self.custom),
            "alias": self.alias,
            "aliases": list(collect_alias_routes(self)),
        }


NodeSpec.model_rebuild()

TreeDescription = Dict[str, NodeSpec]
BranchInput = Union[NodeSpec, Mapping[str, Any]]


def define_branch(branch: BranchInput) -> NodeSpec:
    """
    Valide et retourne une branche.

    Args:
        branch: NodeSpec déjà construit ou mapping {build, children, custom, alias}

    Returns:
        NodeSpec validé

    Raises:
        ConfigurationError: définition invalide
    """
    if isinstance(branch, NodeSpec):
        return branch
    if not isinstance(branch, Mapping):
        raise ConfigurationError(
            f"a branch must be a NodeSpec or a mapping, got {type(branch).__name__}"
        )
    try:
        return NodeSpec.model_validate(dict(branch))
    except ValidationError as e:
        raise ConfigurationError(f"invalid branch definition: {e}") from e


def define_tree(
    tree: Mapping[str, BranchInput],
    strict: Optional[bool] = None,
    settings: Optional[ReselectSettings] = None,
) -> TreeDescription:
    """
    Valide et retourne la description complète de l'arbre.

    Args:
        tree: mapping nom racine -> branche
        strict: unicité des alias sur tout l'arbre (défaut: settings.strict_aliases)
        settings: settings explicites (défaut: get_settings())

    Returns:
        Dict nom racine -> NodeSpec, dans l'ordre de déclaration
    """
    if not isinstance(tree, Mapping):
        raise ConfigurationError(
            f"a tree must be a mapping of top-level names, got {type(tree).__name__}"
        )
    if not tree:
        raise ConfigurationError("a tree needs at least one top-level node")

    description: TreeDescription = {}
    for name, branch in tree.items():
        check_name(name, "top-level")
        description[name] = define_branch(branch)

    if strict is None:
        strict = (settings or get_settings()).strict_aliases
    if strict:
        collect_tree_aliases(description)

    return description
