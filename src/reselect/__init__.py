"""
Reselect

Page objects déclaratifs pour Playwright: une description d'arbre unique
devient un navigateur chaînable, résolu à la demande.

Usage:
    from reselect import define_tree, reselect_tree

    tree = define_tree({
        "root": {
            "build": lambda ctx: setattr(ctx, "locator", ctx.page.locator("div")),
            "children": {...},
        },
    })
    select = reselect_tree(tree)
    await select(page).root().header().title().expect_chain().to_be_visible()
"""

from .errors import (
    ReselectError,
    ConfigurationError,
    DuplicateAliasError,
    MissingSessionError,
    ContractViolationError,
)

from .config import ReselectSettings, get_settings

from .tree import (
    NodeSpec,
    TreeDescription,
    Context,
    AliasTable,
    Navigator,
    TreeRoot,
    TreeSelector,
    define_branch,
    define_tree,
    reselect_tree,
)

from .handle import (
    Deferred,
    DeferredState,
    DecoratedHandle,
    ExpectChain,
)

__all__ = [
    # Errors
    "ReselectError",
    "ConfigurationError",
    "DuplicateAliasError",
    "MissingSessionError",
    "ContractViolationError",
    # Config
    "ReselectSettings",
    "get_settings",
    # Tree
    "NodeSpec",
    "TreeDescription",
    "Context",
    "AliasTable",
    "Navigator",
    "TreeRoot",
    "TreeSelector",
    "define_branch",
    "define_tree",
    "reselect_tree",
    # Handles
    "Deferred",
    "DeferredState",
    "DecoratedHandle",
    "ExpectChain",
]
