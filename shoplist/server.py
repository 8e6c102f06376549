"""
Shoplist Backend: Server Lifecycle
===================================

What:  Starts and stops a uvicorn server for the app from async code.
How:   The listening socket is bound here, before uvicorn starts, so a port
       conflict surfaces as BindError instead of uvicorn's sys.exit(1). The
       bound socket is handed to uvicorn.Server.serve(), which runs as an
       asyncio task until stop() flips `should_exit`.
Who:   The `shoplist` console script (main()) and the lifecycle tests.

Usage:
    server = AppServer(port=0)
    await server.start()      # returns once accepting connections
    ... requests to http://127.0.0.1:{server.port} ...
    await server.stop()       # returns once drained and shut down
"""

import asyncio
import logging
import socket
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI

from shoplist.config import Settings, settings as default_settings
from shoplist.exceptions import BindError, ServerError, ServerNotRunningError
from shoplist.main import create_app, setup_logging

logger = logging.getLogger(__name__)

STARTUP_POLL_INTERVAL = 0.01  # seconds


class AppServer:
    """
    A startable/stoppable uvicorn server for one FastAPI app.

    Args:
        app:      App to serve; a fresh create_app() when omitted
        host:     Interface to bind; defaults to settings.host
        port:     Port to bind (0 = ephemeral); defaults to settings.port
        settings: Settings used for defaults and for building the app
    """

    def __init__(
        self,
        app: Optional[FastAPI] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or default_settings
        self.app = app if app is not None else create_app(self._settings)
        self.host = host if host is not None else self._settings.host
        self._requested_port = port if port is not None else self._settings.port
        self._socket: Optional[socket.socket] = None
        self._server: Optional[uvicorn.Server] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def port(self) -> int:
        """The bound port once started (resolves port 0), else the requested one."""
        if self._socket is not None:
            return self._socket.getsockname()[1]
        return self._requested_port

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> "AppServer":
        """
        Bind the port and start serving.

        Returns:
            self, once uvicorn reports it is accepting connections

        Raises:
            BindError:   The host/port cannot be bound
            ServerError: Already running, or uvicorn exited during startup
        """
        if self.is_running:
            raise ServerError(message="Server is already running")

        self._socket = self._bind()

        config = uvicorn.Config(
            self.app,
            host=self.host,
            port=self.port,
            lifespan="on",
            log_config=None,  # keep the logging set up by setup_logging()
            access_log=False,  # RequestLoggingMiddleware writes the access log
        )
        self._server = uvicorn.Server(config)
        self._task = asyncio.create_task(self._server.serve(sockets=[self._socket]))

        while not self._server.started:
            if self._task.done():
                try:
                    # Surfaces any exception raised by uvicorn during startup
                    self._task.result()
                finally:
                    self._reset()
                raise ServerError(message="Server exited during startup")
            await asyncio.sleep(STARTUP_POLL_INTERVAL)

        logger.info("Your app is listening on port %d", self.port)
        return self

    async def stop(self) -> None:
        """
        Stop accepting connections and wait for uvicorn to shut down.

        Raises:
            ServerNotRunningError: start() was not called, or already stopped
        """
        if not self.is_running:
            raise ServerNotRunningError()

        logger.info("Closing server")
        self._server.should_exit = True
        try:
            await self._task
        finally:
            self._reset()

    async def wait_closed(self) -> None:
        """Wait until the server exits, e.g. after SIGINT/SIGTERM."""
        if self._task is None:
            raise ServerNotRunningError()
        try:
            await self._task
        finally:
            self._reset()

    def _bind(self) -> socket.socket:
        family = socket.AF_INET6 if ":" in self.host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((self.host, self._requested_port))
        except OSError as e:
            sock.close()
            raise BindError(self.host, self._requested_port, reason=e.strerror) from e
        sock.set_inheritable(True)
        return sock

    def _reset(self) -> None:
        if self._socket is not None:
            self._socket.close()
        self._socket = None
        self._server = None
        self._task = None


async def _serve(settings: Settings) -> None:
    server = AppServer(settings=settings)
    await server.start()
    await server.wait_closed()


def main() -> None:
    """Entry point for `shoplist` / `python -m shoplist`."""
    setup_logging(default_settings.log_level)
    try:
        asyncio.run(_serve(default_settings))
    except BindError as e:
        logger.error("%s", e.message)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted, server stopped")
