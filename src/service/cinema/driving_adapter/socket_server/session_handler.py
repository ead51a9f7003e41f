"""
Session Handler

One instance per accepted connection, run on its own thread.

States:
- Unauthenticated: public commands only (LOGIN, REGISTER, LOGOUT, catalog)
- Authenticated: LOGIN binds the user; LOGOUT returns to Unauthenticated
- Closed: client EOF or any socket error; the connection is closed exactly once

Every non-empty request line gets exactly one response block. Failures never
end the session: CustomBaseError renders as `ERROR|<message>`, anything else
as `ERROR|Internal server error` after being logged with its traceback.
"""

import socket

from src.platform.exception.exceptions import CustomBaseError, InvalidCommandError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import BookingMetrics
from src.service.cinema.driving_adapter.protocol import protocol_codec as codec
from src.service.cinema.driving_adapter.protocol.command_dispatcher import (
    CommandDispatcher,
    SessionContext,
)
from src.service.cinema.driving_adapter.protocol.protocol_constant import (
    DELIMITER,
    ENCODING,
    GREETING,
    INTERNAL_ERROR_MESSAGE,
    LINE_TERMINATOR,
    UNKNOWN_COMMAND_LABEL,
)


class SessionHandler:
    def __init__(
        self,
        *,
        conn: socket.socket,
        peer: str,
        dispatcher: CommandDispatcher,
        metrics: BookingMetrics,
    ) -> None:
        self.conn = conn
        self.dispatcher = dispatcher
        self.metrics = metrics
        self.context = SessionContext(peer=peer)

    def run(self) -> None:
        self.metrics.session_opened()
        Logger.base.info(f'[SESSION] {self.context.peer} connected')
        try:
            self._send([GREETING])
            reader = self.conn.makefile('r', encoding=ENCODING, errors='replace', newline='')
            with reader:
                for line in reader:
                    response = self.handle_line(line)
                    if response:
                        self._send(response)
        except OSError as e:
            Logger.base.info(f'[SESSION] {self.context.peer} connection lost: {e}')
        finally:
            self._close()
            self.metrics.session_closed()
            Logger.base.info(f'[SESSION] {self.context.peer} closed')

    def handle_line(self, line: str) -> list[str]:
        """Response block for one request line; empty for a blank line"""
        label = UNKNOWN_COMMAND_LABEL
        try:
            parsed = codec.parse_line(line)
            if parsed is None:
                return []
            label = parsed.command.value
            response = self.dispatcher.dispatch(self.context, parsed)
        except InvalidCommandError as e:
            # Only the command token is logged; later fields may carry credentials
            token = line.split(DELIMITER, 1)[0].strip()[:40]
            Logger.base.warning(f'[SESSION] {self.context.peer} unknown command {token!r}')
            self.metrics.record_command(command=label, success=False)
            return [codec.error(e.message)]
        except CustomBaseError as e:
            self.metrics.record_command(command=label, success=False)
            return [codec.error(e.message)]
        except Exception as e:
            Logger.base.exception(f'[SESSION] {self.context.peer} {label} failed: {e}')
            self.metrics.record_command(command=label, success=False)
            return [codec.error(INTERNAL_ERROR_MESSAGE)]

        self.metrics.record_command(command=label, success=True)
        return response

    def _send(self, lines: list[str]) -> None:
        payload = ''.join(f'{line}{LINE_TERMINATOR}' for line in lines)
        self.conn.sendall(payload.encode(ENCODING))

    def _close(self) -> None:
        try:
            self.conn.shutdown(socket.SHUT_RDWR)
        except OSError:
            # Peer already gone
            pass
        self.conn.close()
