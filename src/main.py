"""
Cinema Booking Server

Restores the snapshot, ensures the default admin, then serves the line
protocol until SIGINT/SIGTERM.
"""

import signal
import sys
from types import FrameType
from typing import Optional

from src.platform.config.di import cleanup, container
from src.platform.logging.loguru_io import Logger


def main() -> int:
    settings = container.config_service()
    Logger.base.info(f'🚀 [{settings.PROJECT_NAME}] Starting up (v{settings.VERSION})...')

    if settings.SNAPSHOT_ENABLED:
        Logger.base.info(f'💾 [Bootstrap] Snapshot file: {settings.SNAPSHOT_PATH}')
    else:
        Logger.base.warning('💾 [Bootstrap] Snapshot disabled, state lives in memory only')
    container.bootstrap_store_use_case().execute()

    if settings.METRICS_ENABLED:
        container.booking_metrics().expose(port=settings.METRICS_PORT)
        Logger.base.info(f'📊 [Metrics] Prometheus endpoint on :{settings.METRICS_PORT}')

    server = container.booking_server()

    def _handle_signal(signum: int, _frame: Optional[FrameType]) -> None:
        Logger.base.info(f'🛑 [{settings.PROJECT_NAME}] Received {signal.Signals(signum).name}')
        server.request_stop()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    try:
        server.start()
    except OSError as e:
        Logger.base.error(f'❌ [{settings.PROJECT_NAME}] Cannot bind listener: {e}')
        return 1

    Logger.base.info(f'✅ [{settings.PROJECT_NAME}] Ready to accept connections')
    try:
        server.serve_forever()
    finally:
        server.stop()
        container.store().persist()
        cleanup()
        Logger.base.info(f'👋 [{settings.PROJECT_NAME}] Shutdown complete')
    return 0


if __name__ == '__main__':
    sys.exit(main())
