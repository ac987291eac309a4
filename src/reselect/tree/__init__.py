"""
Reselect - Tree

Compilation d'une description d'arbre en navigateurs chaînables.
"""

from .types import (
    NodeSpec,
    TreeDescription,
    RESERVED_NAMES,
    define_branch,
    define_tree,
)

from .context import (
    Context,
    fork,
    propagate,
    root_context,
)

from .aliases import (
    AliasTable,
    collect_alias_routes,
    collect_tree_aliases,
)

from .navigator import (
    Navigator,
    build_navigator,
)

from .root import (
    TreeRoot,
    TreeSelector,
    reselect_tree,
)

__all__ = [
    # Types
    "NodeSpec",
    "TreeDescription",
    "RESERVED_NAMES",
    "define_branch",
    "define_tree",
    # Context
    "Context",
    "fork",
    "propagate",
    "root_context",
    # Aliases
    "AliasTable",
    "collect_alias_routes",
    "collect_tree_aliases",
    # Navigator
    "Navigator",
    "build_navigator",
    # Root
    "TreeRoot",
    "TreeSelector",
    "reselect_tree",
]
