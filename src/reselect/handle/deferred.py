"""
Reselect - Deferred

Résultat à la fois awaitable et chaînable (équivalent Python d'un
"thenable" explicite).

- AWAITING: opération en attente (rien n'a tourné)
- SETTLED: opération terminée (succès ou échec), résultat figé

Usage:
    await chain.to_be_visible().then(lambda c: c.to_have_text("Title"))
    report = await node.debug()
"""

from __future__ import annotations

import asyncio
import inspect
from enum import Enum
from typing import Any, Awaitable, Callable, Generator, Generic, Optional, TypeVar

T = TypeVar("T")


class DeferredState(str, Enum):
    """États d'un Deferred"""
    AWAITING = "awaiting"   # Pas encore attendu, ou en cours
    SETTLED = "settled"     # Terminé, résultat ou exception figé


class Deferred(Generic[T]):
    """
    Opération suspendue, exécutée une seule fois au premier await.

    Les await suivants renvoient le même résultat (ou relèvent la même
    exception) sans relancer l'opération.
    """

    def __init__(self, operation: Callable[[], Awaitable[T]], label: str = "deferred"):
        self._operation = operation
        self._label = label
        self._task: Optional[asyncio.Future] = None

    @property
    def state(self) -> DeferredState:
        if self._task is not None and self._task.done():
            return DeferredState.SETTLED
        return DeferredState.AWAITING

    def __await__(self) -> Generator[Any, None, T]:
        if self._task is None:
            self._task = asyncio.ensure_future(self._operation())
        return self._task.__await__()

    def then(self, callback: Callable[[T], Any]) -> Deferred[Any]:
        """
        Chaîne une étape: callback(valeur) après succès de celle-ci.

        Si callback retourne un awaitable (autre Deferred, coroutine), il est
        attendu à son tour. Un échec interrompt la chaîne: callback n'est
        jamais appelé.
        """
        async def _chained() -> Any:
            value = await self
            result = callback(value)
            if inspect.isawaitable(result):
                result = await result
            return result

        return Deferred(_chained, label=f"{self._label}.then")

    def __repr__(self) -> str:
        return f"<Deferred {self._label} state={self.state.value}>"
