"""
Reselect - Assertion Chain Proxy

Proxy fluide au-dessus de la librairie d'assertions (expect Playwright):
chaque assertion retourne un Deferred qui, une fois attendu, se résout en
un NOUVEL ExpectChain sur le même locator.

    await node.expect_chain() \\
        .to_be_visible() \\
        .then(lambda c: c.to_have_text(re.compile("Docs"))) \\
        .then(lambda c: c.to_have_text(re.compile("API")))

Le premier échec interrompt la chaîne et remonte tel quel (AssertionError,
TimeoutError): il n'est jamais avalé.
"""

from __future__ import annotations

import inspect
from functools import partial
from typing import Any, Callable, Dict, Optional, Tuple

from reselect.common.logging import get_logger
from reselect.errors import ContractViolationError, format_route

from .deferred import Deferred
from .options import RuntimeOptions

logger = get_logger(__name__)


def _public_callables(assertions: Any):
    for name in dir(assertions):
        if name.startswith("_"):
            continue
        if callable(getattr(assertions, name, None)):
            yield name


class ExpectChain:
    """
    Capacités d'assertion de la librairie, re-liées au même locator.

    Un objet d'assertions neuf est créé pour chaque appel: aucune option
    (négation, message) ne fuit d'une étape à la suivante.
    """

    def __init__(
        self,
        locator: Any,
        path: Tuple[str, ...],
        options: RuntimeOptions,
        message: Optional[str] = None,
    ):
        self._locator = locator
        self._path = path
        self._options = options
        self._message = message

    def _assertions(self) -> Any:
        return self._options.expect_factory(self._locator, self._message)

    def _receiver(self) -> str:
        return f"{format_route(self._path)}.expect_chain()"

    def __getattr__(self, name: str) -> Callable[..., Deferred[ExpectChain]]:
        if name.startswith("_"):
            raise AttributeError(name)

        operation = getattr(self._assertions(), name, None)
        if operation is None or not callable(operation):
            raise ContractViolationError(
                name,
                self._receiver(),
                reason=f"the assertion library has no assertion '{name}'",
            )

        def step(*args: Any, **kwargs: Any) -> Deferred[ExpectChain]:
            return Deferred(
                partial(self._run, name, args, kwargs),
                label=f"{format_route(self._path)}.{name}",
            )

        step.__name__ = name
        return step

    async def _run(self, name: str, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> ExpectChain:
        timeout = self._options.settings.assertion_timeout_ms
        if timeout is not None and "timeout" not in kwargs:
            kwargs = {**kwargs, "timeout": timeout}

        operation = getattr(self._assertions(), name)
        try:
            result = operation(*args, **kwargs)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(
                f"[ExpectChain] {name} failed at {format_route(self._path)}: "
                f"{type(e).__name__}: {e}"
            )
            raise

        logger.debug(f"[ExpectChain] {name} passed at {format_route(self._path)}")
        return ExpectChain(self._locator, self._path, self._options, self._message)

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(_public_callables(self._assertions())))

    def __repr__(self) -> str:
        return f"<ExpectChain {format_route(self._path)}: {self._locator!r}>"
