# lms_api/core/clock.py
from datetime import date, datetime


class Clock:
    """Wall clock used for training-day and check-in lateness calculations.

    Handlers receive it through the ``get_clock`` dependency so tests can
    override it with a fixed moment.
    """

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return self.now().date()


_clock = Clock()


def get_clock() -> Clock:
    return _clock
