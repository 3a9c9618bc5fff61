"""Process lifecycle: bind, serve, wait for a signal, drain, exit.

The ``Lifecycle`` object owns the listening socket for one run. It binds
the socket itself so bind failures surface as ``StartupError`` before
anything is printed, hands the socket to uvicorn, and keeps signal
handling for itself so the first SIGINT/SIGTERM wins.

Usage::

    app = create_app(config)
    Lifecycle(app, config).run()
"""

import contextlib
import logging
import socket
from collections.abc import Awaitable, Callable, Iterator

import anyio
import uvicorn

from perch._internal.asgi import ASGIApp
from perch.config import AppConfig
from perch.errors import StartupError
from perch.server.signals import receive_shutdown_signals, wait_for_shutdown_signal

logger = logging.getLogger("perch.server")

ShutdownTrigger = Callable[[], Awaitable[object]]


class _Server(uvicorn.Server):
    """uvicorn server that leaves signal handling to the Lifecycle."""

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield


class Lifecycle:
    """Owns the listening socket and HTTP server for one process run.

    States run strictly forward: created → bound → serving → drained.
    A Lifecycle is single-use.
    """

    __slots__ = ("_port", "_server", "_shutdown_requested", "_sock", "_stop_cause", "app", "config")

    def __init__(self, app: ASGIApp, config: AppConfig | None = None) -> None:
        self.app = app
        self.config: AppConfig = config or getattr(app, "config", None) or AppConfig()
        self._sock: socket.socket | None = None
        self._port: int | None = None
        self._server: _Server | None = None
        self._shutdown_requested = False
        self._stop_cause: BaseException | None = None

    # -- Socket --

    def bind(self) -> socket.socket:
        """Bind and listen on the configured address.

        Idempotent: a second call returns the already-bound socket.

        Raises:
            StartupError: If the address is in use or otherwise unavailable.
        """
        if self._sock is not None:
            return self._sock

        self.config.validate()
        host, port = self.config.host, self.config.port
        family = socket.AF_INET6 if ":" in host else socket.AF_INET
        try:
            sock = socket.create_server((host, port), family=family, backlog=self.config.backlog)
        except OSError as exc:
            msg = f"Could not bind {self.config.address}: {exc.strerror or exc}"
            raise StartupError(msg) from exc

        self._sock = sock
        self._port = sock.getsockname()[1]
        logger.debug("Bound %s", self.address)
        return sock

    @property
    def port(self) -> int:
        """The bound port, which differs from the config when it asked for 0.

        Remembered at bind time, so it stays readable after shutdown.
        """
        if self._port is None:
            return self.config.port
        return self._port

    @property
    def address(self) -> str:
        return f"{self.config.host}:{self.port}"

    # -- Serving --

    def run(self) -> None:
        """Serve until SIGINT/SIGTERM, then drain and return.

        Blocking entry point for the CLI.
        """
        anyio.run(self.serve)

    async def serve(self, shutdown_trigger: ShutdownTrigger | None = None) -> None:
        """Serve until *shutdown_trigger* completes, then shut down gracefully.

        With no trigger, waits for the first termination signal. After the
        trigger fires the listening socket is closed, in-flight requests
        are allowed to finish, and the ASGI lifespan shutdown runs.

        Raises:
            StartupError: If the socket cannot be bound or the server stops
                before shutdown was requested.
            SignalError: If signal handlers cannot be installed.
        """
        if self._server is not None:
            msg = "Lifecycle.serve() can only be called once."
            raise RuntimeError(msg)

        freeze = getattr(self.app, "freeze", None)
        if freeze is not None:
            freeze()

        sock = self.bind()
        self._server = server = _Server(
            uvicorn.Config(
                self.app,
                host=self.config.host,
                port=self.port,
                lifespan="on",
                log_config=None,
                access_log=self.config.access_log,
                timeout_graceful_shutdown=self.config.graceful_timeout,
            )
        )

        with contextlib.ExitStack() as stack:
            if shutdown_trigger is None:
                signals = stack.enter_context(receive_shutdown_signals())

                async def wait_for_signal() -> object:
                    return await wait_for_shutdown_signal(signals)

                shutdown_trigger = wait_for_signal

            try:
                await self._serve_until(server, sock, shutdown_trigger)
            finally:
                sock.close()

        if not self._shutdown_requested:
            msg = "Server stopped before shutdown was requested; see the log for the cause."
            raise StartupError(msg) from self._stop_cause

        print("Shutting down...", flush=True)

    async def _serve_until(
        self,
        server: _Server,
        sock: socket.socket,
        shutdown_trigger: ShutdownTrigger,
    ) -> None:
        async with anyio.create_task_group() as tg:

            async def run_server() -> None:
                try:
                    await server.serve(sockets=[sock])
                except SystemExit as exc:
                    # uvicorn exits the process when lifespan startup fails
                    logger.error("HTTP server exited during startup (code %s)", exc.code)
                    self._stop_cause = exc
                # Server exited on its own: stop waiting for the trigger
                tg.cancel_scope.cancel()

            tg.start_soon(run_server)

            while not server.started:
                if server.should_exit:
                    return
                await anyio.sleep(0.01)

            print(f"Listening on {self.address}", flush=True)

            await shutdown_trigger()
            self._shutdown_requested = True
            logger.debug("Shutdown requested; draining in-flight requests")
            server.should_exit = True
