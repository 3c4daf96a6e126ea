from prometheus_client import Counter, Histogram


class CinemaMetrics:
    """
    Cinema Service Core Metrics Collector

    Tracks booking outcomes (including lost seat races) and showtime
    scheduling outcomes (accepted / overlap / invalid window)
    """

    def __init__(self):
        # ========== Booking Metrics ==========
        self.booking_requests = Counter(
            'cinema_booking_requests_total',
            'Total seat booking requests',
            ['result'],  # result: booked/seat_already_booked/showtime_not_found/error
        )

        self.booking_duration = Histogram(
            'cinema_booking_duration_seconds',
            'Seat booking processing time',
            ['result'],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0],
        )

        self.storage_conflicts = Counter(
            'cinema_storage_conflicts_total',
            'Writes rejected by a database constraint and re-checked',
            ['operation'],
        )

        # ========== Scheduling Metrics ==========
        self.showtime_schedule_requests = Counter(
            'cinema_showtime_schedule_requests_total',
            'Showtime create/update requests',
            ['operation', 'result'],  # operation: create/update
        )

    # ========== Helper Methods ==========

    def record_booking(self, *, result: str, duration: float):
        self.booking_requests.labels(result=result).inc()
        self.booking_duration.labels(result=result).observe(duration)

    def record_storage_conflict(self, *, operation: str):
        self.storage_conflicts.labels(operation=operation).inc()

    def record_showtime_schedule(self, *, operation: str, result: str):
        self.showtime_schedule_requests.labels(operation=operation, result=result).inc()


# Global metrics instance
metrics = CinemaMetrics()
