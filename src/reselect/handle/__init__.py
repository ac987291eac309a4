"""
Reselect - Handles

Handles terminaux: décoration du locator résolu, chaîne d'assertions et
résultat awaitable/chaînable.
"""

from .deferred import (
    Deferred,
    DeferredState,
)

from .options import (
    RuntimeOptions,
    ExpectFactory,
)

from .expect_chain import ExpectChain

from .decorated import (
    DecoratedHandle,
    DecoratedLocator,
    decorate_handle,
    capture_debug_report,
    render_debug_report,
)

__all__ = [
    # Deferred
    "Deferred",
    "DeferredState",
    # Options
    "RuntimeOptions",
    "ExpectFactory",
    # Assertions
    "ExpectChain",
    # Handle
    "DecoratedHandle",
    "DecoratedLocator",
    "decorate_handle",
    "capture_debug_report",
    "render_debug_report",
]
