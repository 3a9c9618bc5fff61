"""Perch application class.

Mutable during setup (route registration, error handlers).
Frozen at runtime when ``freeze()`` or ``__call__()`` is first invoked.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from perch._internal.asgi import Receive, Scope, Send
from perch.config import AppConfig
from perch.routing.route import Route
from perch.routing.router import Router
from perch.server.handler import handle_request

logger = logging.getLogger("perch.server")

Handler = Callable[..., Any]


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    path: str
    handler: Handler
    methods: list[str] | None


class App:
    """The perch application, an ASGI 3.0 callable.

    Mutable during setup. Frozen on first use: the route table cannot
    change once requests are being served.

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the router, even if several server threads hit
        ``__call__()`` concurrently on the first request.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_pending_routes",
        "_router",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[_PendingRoute] = []
        self._error_handlers: dict[int, Handler] = {}
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._router: Router | None = None

    # -- Route registration --

    def add_route(
        self,
        path: str,
        handler: Handler,
        *,
        methods: list[str] | None = None,
    ) -> None:
        """Register *handler* for *path*.

        Args:
            path: Literal URL path.
            handler: Called with no arguments; sync or async, returning a
                ``Response``.
            methods: HTTP methods. Defaults to ``["GET"]``.
        """
        self._check_not_frozen()
        self._pending_routes.append(_PendingRoute(path, handler, methods))

    # -- Error handlers --

    def error(self, status: int) -> Callable[[Handler], Handler]:
        """Register an error handler for an HTTP status via decorator."""

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            self._error_handlers[status] = func
            return func

        return decorator

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles the lifespan scope directly, then delegates HTTP scopes
        to the request handler.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self.freeze()

        assert self._router is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            error_handlers=self._error_handlers,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Startup compiles the route table before the first HTTP request;
        a compile failure is reported as ``lifespan.startup.failed`` so the
        server refuses to start. Shutdown has nothing to release.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self.freeze()
                except Exception as exc:
                    logger.exception("Lifespan startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def freeze(self) -> None:
        """Compile the route table. Idempotent and thread-safe.

        Double-checked locking: the fast path skips the lock once the
        app is frozen.
        """
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        router = Router()
        for pending in self._pending_routes:
            methods = frozenset(m.upper() for m in (pending.methods or ["GET"]))
            router.add(
                Route(
                    path=pending.path,
                    handler=pending.handler,
                    methods=methods,
                )
            )
        router.compile()

        self._router = router
        self._frozen = True
        logger.debug("Compiled %d routes", len(router.routes))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and error handlers before calling freeze()."
            )
            raise RuntimeError(msg)
