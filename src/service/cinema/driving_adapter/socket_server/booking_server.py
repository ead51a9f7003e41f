"""
Booking Server

Raw TCP listener: one accept loop thread, one session thread per connection.
The accept loop polls its stop flag on a short socket timeout; stop() also
shuts down every live client socket so session threads unblock and exit.
"""

import socket
import threading
from typing import Callable, Optional

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import BookingMetrics
from src.service.cinema.driving_adapter.protocol.command_dispatcher import CommandDispatcher
from src.service.cinema.driving_adapter.socket_server.session_handler import SessionHandler


ACCEPT_POLL_SECONDS = 0.5


class BookingServer:
    def __init__(
        self,
        *,
        host: str,
        port: int,
        backlog: int,
        dispatcher_factory: Callable[[], CommandDispatcher],
        metrics: BookingMetrics,
    ) -> None:
        self.host = host
        self.port = port
        self.backlog = backlog
        self.dispatcher_factory = dispatcher_factory
        self.metrics = metrics

        self._listener: Optional[socket.socket] = None
        self._accept_thread: Optional[threading.Thread] = None
        self._stopped = threading.Event()
        self._shut_down = False
        self._clients_lock = threading.Lock()
        self._clients: set[socket.socket] = set()
        self._session_threads: set[threading.Thread] = set()

    @property
    def address(self) -> tuple[str, int]:
        """Bound (host, port); the real port when configured with port 0"""
        if self._listener is None:
            return self.host, self.port
        return self._listener.getsockname()[:2]

    @property
    def is_running(self) -> bool:
        return self._accept_thread is not None and self._accept_thread.is_alive()

    def start(self) -> None:
        if self._listener is not None:
            raise RuntimeError('Server already started')

        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            listener.bind((self.host, self.port))
            listener.listen(self.backlog)
        except OSError:
            listener.close()
            raise
        listener.settimeout(ACCEPT_POLL_SECONDS)

        self._listener = listener
        self._stopped.clear()
        self._accept_thread = threading.Thread(
            target=self._accept_loop, name='booking-server-accept', daemon=True
        )
        self._accept_thread.start()

        host, port = self.address
        Logger.base.info(f'[SERVER] Listening on {host}:{port}')

    def serve_forever(self) -> None:
        """Block the caller until request_stop() or stop() runs on another thread"""
        if self._listener is None:
            self.start()
        self._stopped.wait()

    def request_stop(self) -> None:
        """Signal-safe: only flips the stop flag, serve_forever() then returns"""
        self._stopped.set()

    def stop(self, *, timeout: float = 5.0) -> None:
        if self._shut_down:
            return
        self._shut_down = True
        self._stopped.set()

        if self._accept_thread is not None:
            self._accept_thread.join(timeout=timeout)
        if self._listener is not None:
            self._listener.close()

        with self._clients_lock:
            clients = list(self._clients)
            threads = list(self._session_threads)
        for conn in clients:
            try:
                conn.shutdown(socket.SHUT_RDWR)
            except OSError:
                # Session already closing it
                pass
        for thread in threads:
            thread.join(timeout=timeout)

        Logger.base.info(f'[SERVER] Stopped ({len(threads)} sessions drained)')

    # ========== Internals ==========

    def _accept_loop(self) -> None:
        while not self._stopped.is_set():
            try:
                conn, addr = self._listener.accept()
            except socket.timeout:
                continue
            except OSError as e:
                if self._stopped.is_set():
                    break
                Logger.base.error(f'[SERVER] accept() failed: {e}')
                continue

            conn.settimeout(None)
            peer = f'{addr[0]}:{addr[1]}'
            thread = threading.Thread(
                target=self._run_session, args=(conn, peer), name=f'session-{peer}', daemon=True
            )
            with self._clients_lock:
                self._clients.add(conn)
                self._session_threads.add(thread)
            thread.start()

    def _run_session(self, conn: socket.socket, peer: str) -> None:
        try:
            SessionHandler(
                conn=conn,
                peer=peer,
                dispatcher=self.dispatcher_factory(),
                metrics=self.metrics,
            ).run()
        finally:
            with self._clients_lock:
                self._clients.discard(conn)
                self._session_threads.discard(threading.current_thread())
