"""Wicket application class.

Mutable during setup (route declaration). Frozen the first time it serves
a request or is started: the route table is compiled into a ``Registry``
and the fixed stage pipeline is assembled exactly once.
"""

import asyncio
import logging
import socket
import threading
from collections.abc import Callable, Iterable, Sequence
from typing import Any

import uvicorn

from wicket._internal.asgi import Receive, Scope, Send
from wicket._internal.types import Guard, Handler
from wicket.config import AppConfig
from wicket.middleware.body import JSONBodyMiddleware
from wicket.middleware.cors import CORSConfig, CORSMiddleware
from wicket.middleware.guards import GuardMiddleware
from wicket.middleware.protocol import Next
from wicket.middleware.request_log import RequestLogMiddleware
from wicket.routing.registry import Registry, register
from wicket.routing.route import Method, RouteDeclaration
from wicket.server.handler import ErrorBoundary, build_pipeline, handle_request, make_dispatch

logger = logging.getLogger("wicket.server")


class App:
    """The wicket application.

    Routes are declared up front, either as a list or with the decorator::

        app = App(AppConfig(port=3000), routes=STATUS_ROUTES)

        @app.route("/users/{id}", method="GET", guards=(require_api_key,))
        async def get_user(request):
            return {"id": request.path_params["id"]}

        await app.start()
        ...
        await app.stop()

    The pipeline every request passes through, in order: CORS (including
    the preflight short-circuit), error boundary, request logging, guards,
    JSON body parsing, handler.

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        caller compiles the route table. After that the registry and the
        pipeline are read-only and shared by all requests.
    """

    __slots__ = (
        "_declarations",
        "_freeze_lock",
        "_frozen",
        "_pipeline",
        "_registry",
        "_server",
        "_serve_task",
        "_socket",
        "_start_lock",
        "_running",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        routes: Iterable[RouteDeclaration] = (),
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._declarations: list[RouteDeclaration] = list(routes)
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._registry: Registry | None = None
        self._pipeline: Next | None = None

        # Listener state, owned by start()/stop()
        self._running: bool = False
        self._start_lock: asyncio.Lock = asyncio.Lock()
        self._server: uvicorn.Server | None = None
        self._serve_task: asyncio.Task[None] | None = None
        self._socket: socket.socket | None = None

    # -- Route declaration --

    def route(
        self,
        path: str,
        *,
        method: Method | str = Method.GET,
        description: str = "",
        guards: Sequence[Guard] = (),
    ) -> Callable[[Handler], Handler]:
        """Declare a route handler via decorator.

        Args:
            path: URL path pattern. Use ``{param}`` for path parameters.
            method: One of GET, POST, PUT, DELETE. Defaults to GET.
            description: What the route does, for humans.
            guards: Access checks run in order before the handler.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            self._declarations.append(
                RouteDeclaration(path, method, func, description, tuple(guards))
            )
            return func

        return decorator

    def add_routes(self, declarations: Iterable[RouteDeclaration]) -> None:
        """Append declarations to the route table, preserving their order."""
        self._check_not_frozen()
        self._declarations.extend(declarations)

    @property
    def registry(self) -> Registry:
        """The compiled route table. Freezes the app on first access."""
        self._ensure_frozen()
        assert self._registry is not None
        return self._registry

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._pipeline is not None
        await handle_request(scope, receive, send, pipeline=self._pipeline)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        The app freezes during startup, so a broken route table stops the
        server before it accepts a single connection.
        """
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Lifecycle --

    @property
    def running(self) -> bool:
        """True between a successful ``start()`` and the matching ``stop()``."""
        return self._running

    @property
    def bound_port(self) -> int | None:
        """The port actually bound, which differs from ``config.port`` when that is 0."""
        if self._socket is None:
            return None
        return self._socket.getsockname()[1]

    async def start(self) -> None:
        """Freeze the app and begin listening.

        Returns once the socket is bound and accepting connections.
        Calling ``start()`` on a running app does nothing.
        """
        async with self._start_lock:
            if self._running:
                return

            self._ensure_frozen()
            sock = self._bind_socket()
            server = uvicorn.Server(
                uvicorn.Config(
                    self,
                    host=self.config.host,
                    port=self.config.port,
                    lifespan="on",
                    log_config=None,
                    access_log=False,
                    proxy_headers=False,
                )
            )
            task = asyncio.create_task(server.serve(sockets=[sock]))

            while not server.started:
                if task.done():
                    sock.close()
                    task.result()
                    msg = "Server exited during startup"
                    raise RuntimeError(msg)
                await asyncio.sleep(0.01)

            self._socket = sock
            self._server = server
            self._serve_task = task
            self._running = True
            logger.debug("Listening on %s:%d", self.config.host, self.bound_port)

    async def stop(self) -> None:
        """Stop listening and wait until the socket is fully closed.

        In-flight requests finish first. Calling ``stop()`` on an app that
        is not running does nothing.
        """
        async with self._start_lock:
            if not self._running:
                return

            assert self._server is not None
            assert self._serve_task is not None
            self._server.should_exit = True
            try:
                await self._serve_task
            finally:
                if self._socket is not None:
                    self._socket.close()
                self._socket = None
                self._server = None
                self._serve_task = None
                self._running = False
            logger.debug("Listener closed")

    async def wait(self) -> None:
        """Block until the listener exits, whether through stop() or on its own."""
        task = self._serve_task
        if task is not None:
            await asyncio.shield(task)

    def _bind_socket(self) -> socket.socket:
        host = self.config.host
        family = socket.AF_INET6 if ":" in host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((host, self.config.port))
        except OSError:
            sock.close()
            raise
        sock.set_inheritable(True)
        return sock

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the route table and assemble the pipeline.

        MUST only be called while holding _freeze_lock.
        """
        cfg = self.config

        # 1. Compile route table; duplicate or malformed routes stop startup here
        registry = register(self._declarations)

        # 2. Assemble the fixed stage order
        cors = CORSMiddleware(
            CORSConfig(
                allow_origins=cfg.cors_allow_origins,
                allow_localhost=cfg.cors_allow_localhost,
                allow_methods=cfg.cors_allow_methods,
                allow_headers=cfg.cors_allow_headers,
                expose_headers=cfg.cors_expose_headers,
                allow_credentials=cfg.cors_allow_credentials,
                max_age=cfg.cors_max_age,
            )
        )
        middleware: tuple[Callable[..., Any], ...] = (
            cors,
            ErrorBoundary(),
            RequestLogMiddleware(trust_proxy=cfg.trust_proxy),
            GuardMiddleware(registry),
            JSONBodyMiddleware(cfg.max_body_size),
        )
        self._pipeline = build_pipeline(
            middleware,
            make_dispatch(request_timeout=cfg.request_timeout),
        )
        self._registry = registry
        self._frozen = True
        logger.debug("Compiled %d route(s)", len(registry))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot declare routes after the app has started serving requests. "
                "Declare every route before calling app.start()."
            )
            raise RuntimeError(msg)
