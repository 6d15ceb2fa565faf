import pytest


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTimer:
    def __init__(self, interval, callback) -> None:
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True


class FakeTimers:
    def __init__(self) -> None:
        self.created: list[FakeTimer] = []

    def __call__(self, interval, callback) -> FakeTimer:
        timer = FakeTimer(interval, callback)
        self.created.append(timer)
        return timer

    def __len__(self) -> int:
        return len(self.created)

    def __getitem__(self, index: int) -> FakeTimer:
        return self.created[index]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timers():
    return FakeTimers()
