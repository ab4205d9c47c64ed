from datetime import timedelta

from django.utils import timezone

from apps.verification.stores import InMemoryCodeStore


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start=None):
        self.now = start or timezone.now()

    def __call__(self):
        return self.now

    def advance(self, seconds: float):
        self.now += timedelta(seconds=seconds)


class LosingStore(InMemoryCodeStore):
    """In-memory store whose next `losses` swaps report a concurrent writer."""

    def __init__(self, losses: int):
        super().__init__()
        self.losses = losses
        self.swaps = 0

    def compare_and_swap(self, key, expected_version, record):
        self.swaps += 1
        if self.losses > 0:
            self.losses -= 1
            return False
        return super().compare_and_swap(key, expected_version, record)


def wrong_code(code: str) -> str:
    return '000000' if code != '000000' else '111111'
