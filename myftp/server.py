"""Multi-client TCP server for the FTP control connection."""

from __future__ import annotations

import selectors
import socket
import threading
from collections.abc import Callable
from dataclasses import dataclass

from .logger import Logger, LogLevel
from .session import SessionState

MAX_CLIENTS = 4096
GREETING = b"220 Service ready for new user.\r\n"
BUSY_MESSAGE = b"server too busy, try again later\r\n"
_READ_SIZE = 4095

RequestHandler = Callable[[str, SessionState], None]

_ACCEPT = object()
_WAKE = object()


class NetworkServerError(Exception):
    """Raised when the listening socket cannot be set up."""


@dataclass
class _Client:
    session: SessionState
    address: str


class NetworkServer:
    """Accepts clients and hands every request they send to a handler."""

    def __init__(
        self, port: int, logger: Logger, path: str, handler: RequestHandler
    ) -> None:
        self._logger = logger
        self._path = path
        self._handler = handler
        self._clients: dict[socket.socket, _Client] = {}
        self._lock = threading.RLock()
        self._running = False
        self._stopping = False
        self._closed = False

        self._socket = self._create_socket()
        try:
            self._socket.bind(("", port))
        except OSError as exc:
            self._socket.close()
            raise NetworkServerError(exc.strerror or str(exc)) from exc
        try:
            self._socket.listen(socket.SOMAXCONN)
        except OSError as exc:
            self._socket.close()
            raise NetworkServerError("Cannot listen on socket") from exc
        self.port: int = self._socket.getsockname()[1]

        self._wake_recv, self._wake_send = socket.socketpair()
        self._wake_recv.setblocking(False)
        self._selector = selectors.DefaultSelector()
        self._selector.register(self._socket, selectors.EVENT_READ, _ACCEPT)
        self._selector.register(self._wake_recv, selectors.EVENT_READ, _WAKE)

    @staticmethod
    def _create_socket() -> socket.socket:
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError as exc:
            raise NetworkServerError("Socket creation failed") from exc
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        except OSError as exc:
            sock.close()
            raise NetworkServerError("setsockopt SO_REUSEADDR failed") from exc
        return sock

    def __enter__(self) -> NetworkServer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def run(self) -> None:
        """Serve clients until the server is closed or polling fails."""
        with self._lock:
            if self._closed:
                raise NetworkServerError("server is closed")
            self._running = True
        try:
            while not self._stopping:
                try:
                    events = self._selector.select()
                except OSError:
                    self._logger.log(LogLevel.ERROR, "failed to poll network activity")
                    break
                for key, _ in events:
                    if key.data is _WAKE:
                        self._drain_wakeup()
                    elif key.data is _ACCEPT:
                        self._accept()
                    elif key.fileobj in self._clients:
                        self._serve(key.fileobj, key.data)
        finally:
            self._release()

    def close(self) -> None:
        """Stop a running server, or release its sockets if it is not running."""
        with self._lock:
            if self._closed:
                return
            if self._running:
                self._stopping = True
                try:
                    self._wake_send.send(b"\0")
                except OSError:
                    pass
                return
            self._release()

    def _drain_wakeup(self) -> None:
        try:
            while self._wake_recv.recv(64):
                pass
        except OSError:
            pass

    def _accept(self) -> None:
        self._logger.log(LogLevel.DEBUG, "incoming client connection")
        if len(self._clients) >= MAX_CLIENTS:
            try:
                connection, _ = self._socket.accept()
            except OSError:
                self._logger.log(
                    LogLevel.WARN,
                    "cannot connect new client, reached simultaneous clients limit",
                )
                self._logger.log(
                    LogLevel.ERROR, "failed to send message to incoming client"
                )
                return
            self._logger.log(
                LogLevel.WARN,
                "cannot connect new client, reached simultaneous clients limit",
            )
            with connection:
                try:
                    connection.sendall(BUSY_MESSAGE)
                except OSError:
                    pass
            return

        try:
            connection, (host, remote_port) = self._socket.accept()
        except OSError:
            self._logger.log(LogLevel.ERROR, "cannot accept incoming client connection")
            return
        client = _Client(SessionState(connection, self._path), host)
        self._clients[connection] = client
        self._selector.register(connection, selectors.EVENT_READ, client)
        self._logger.log(
            LogLevel.INFO,
            f"client from {host} connected on remote port {remote_port}",
        )
        try:
            connection.sendall(GREETING)
        except OSError:
            pass

    def _serve(self, connection: socket.socket, client: _Client) -> None:
        try:
            data = connection.recv(_READ_SIZE)
        except OSError:
            data = b""
        if not data:
            self._drop(connection, client)
            return
        self._handler(data.decode("utf-8", "surrogateescape"), client.session)
        if connection.fileno() == -1:
            self._drop(connection, client)

    def _drop(self, connection: socket.socket, client: _Client) -> None:
        self._logger.log(LogLevel.INFO, f"client from {client.address} disconnected")
        try:
            self._selector.unregister(connection)
        except (KeyError, ValueError):
            pass
        connection.close()
        self._clients.pop(connection, None)
        if client.session.data_socket is not None:
            client.session.data_socket.close()
            client.session.data_socket = None

    def _release(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._running = False
            for connection, client in list(self._clients.items()):
                connection.close()
                if client.session.data_socket is not None:
                    client.session.data_socket.close()
            self._clients.clear()
            self._selector.close()
            self._socket.close()
            self._wake_recv.close()
            self._wake_send.close()