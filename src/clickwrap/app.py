"""The clickwrap Site — route table plus ASGI entry point.

Mutable while routes are registered. Frozen (router compiled) on the
first ASGI call, so the route table can't change while serving.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from kida import Environment

from clickwrap._internal.asgi import Receive, Scope, Send
from clickwrap.config import SiteConfig
from clickwrap.routing.route import Route
from clickwrap.routing.router import Router
from clickwrap.server.handler import handle_request
from clickwrap.templating import create_environment

logger = logging.getLogger("clickwrap.server")

Handler = Callable[..., Any]


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    path: str
    handler: Handler
    methods: tuple[str, ...]
    name: str | None


class Site:
    """An ASGI application with a fixed route table.

    Usage::

        site = Site(SiteConfig(directory="./site"))

        @site.route("/")
        def home(request):
            return "hello"
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_kida_env",
        "_pending_routes",
        "_router",
        "config",
    )

    def __init__(self, config: SiteConfig | None = None, *, kida_env: Environment | None = None) -> None:
        self.config: SiteConfig = config or SiteConfig()
        self._kida_env: Environment = kida_env or create_environment(self.config)
        self._pending_routes: list[_PendingRoute] = []
        self._router: Router | None = None
        self._frozen = False
        self._freeze_lock = threading.Lock()

    @property
    def kida_env(self) -> Environment:
        return self._kida_env

    @property
    def router(self) -> Router:
        """The compiled router (freezes the site on first access)."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: URL pattern. Use ``{param}`` for a single-segment parameter.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name, shown by ``clickwrap routes``.
        """

        def decorator(func: Handler) -> Handler:
            self.add_route(path, func, methods=methods, name=name)
            return func

        return decorator

    def add_route(
        self,
        path: str,
        handler: Handler,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> None:
        """Register *handler* for *path*; the non-decorator form of ``route()``."""
        self._check_not_frozen()
        upper = tuple(m.upper() for m in (methods or ["GET"]))
        self._pending_routes.append(_PendingRoute(path, handler, upper, name))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._router is not None
        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            kida_env=self._kida_env,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge lifespan startup/shutdown, freezing on startup."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    logger.exception("site failed to start")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    def _ensure_frozen(self) -> None:
        # Lock + double-check so concurrent first requests compile once
        if self._frozen:
            return
        with self._freeze_lock:
            if not self._frozen:
                self._freeze()

    def _freeze(self) -> None:
        router = Router()
        for pending in self._pending_routes:
            router.add(
                Route(
                    path=pending.path,
                    handler=pending.handler,
                    methods=frozenset(pending.methods),
                    name=pending.name,
                )
            )
        router.compile()
        self._router = router
        self._frozen = True
        logger.debug("site frozen with %d route(s)", len(self._pending_routes))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot register routes after the site has started serving."
            raise RuntimeError(msg)

    def run(self, host: str | None = None, port: int | None = None, *, reload: bool = False) -> None:
        """Serve the site with pounce."""
        from clickwrap.server.run import run_server

        run_server(
            self,
            host=host or self.config.host,
            port=port or self.config.port,
            reload=reload,
        )
