from prometheus_client import Counter, Histogram


class BookingMetrics:
    """
    Booking admission metrics

    Counts admitted and rejected reservations per operation so capacity
    pressure (full rooms) and eligibility problems show up on dashboards.
    """

    def __init__(self):
        self.booking_admissions = Counter(
            'booking_admissions_total',
            'Reservations admitted',
            ['operation'],  # operation: create/change
        )

        self.booking_rejections = Counter(
            'booking_rejections_total',
            'Reservations rejected by admission control',
            ['operation', 'reason'],  # reason: BookingRejection value
        )

        self.booking_admission_duration = Histogram(
            'booking_admission_duration_seconds',
            'Time spent deciding and persisting a reservation',
            ['operation'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
        )

    def record_admission(self, *, operation: str, duration: float) -> None:
        self.booking_admissions.labels(operation=operation).inc()
        self.booking_admission_duration.labels(operation=operation).observe(duration)

    def record_rejection(self, *, operation: str, reason: str, duration: float) -> None:
        self.booking_rejections.labels(operation=operation, reason=reason).inc()
        self.booking_admission_duration.labels(operation=operation).observe(duration)


# Global metrics instance
metrics = BookingMetrics()
