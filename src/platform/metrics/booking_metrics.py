from prometheus_client import CollectorRegistry, Counter, Gauge, start_http_server


class BookingMetrics:
    """
    Booking Server Core Metrics Collector

    Tracks per-command throughput, booking outcomes and live sessions.
    Each instance owns its registry so several servers (e.g. in tests) can coexist.
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry or CollectorRegistry()

        # ========== Protocol Metrics ==========
        self.commands_processed = Counter(
            'cinema_commands_processed_total',
            'Total processed protocol commands',
            ['command', 'result'],  # result: success/error
            registry=self.registry,
        )

        self.active_sessions = Gauge(
            'cinema_active_sessions',
            'Currently connected client sessions',
            registry=self.registry,
        )

        # ========== Booking Business Metrics ==========
        self.bookings_created = Counter(
            'cinema_bookings_created_total',
            'Total confirmed reservations',
            registry=self.registry,
        )

        self.bookings_cancelled = Counter(
            'cinema_bookings_cancelled_total',
            'Total cancelled reservations',
            registry=self.registry,
        )

        self.seats_booked = Counter(
            'cinema_seats_booked_total',
            'Total seats booked across all reservations',
            registry=self.registry,
        )

    # ========== Helper Methods ==========

    def record_command(self, *, command: str, success: bool) -> None:
        self.commands_processed.labels(
            command=command, result='success' if success else 'error'
        ).inc()

    def record_booking_created(self, *, seat_count: int) -> None:
        self.bookings_created.inc()
        self.seats_booked.inc(seat_count)

    def record_booking_cancelled(self) -> None:
        self.bookings_cancelled.inc()

    def session_opened(self) -> None:
        self.active_sessions.inc()

    def session_closed(self) -> None:
        self.active_sessions.dec()

    def expose(self, *, port: int) -> None:
        start_http_server(port, registry=self.registry)
