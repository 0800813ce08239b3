import pytest

from testsuites.api_testing.framework.wait_helpers import (
    WaitConfig,
    WaitTimeoutError,
    calculate_next_interval,
    get_wait_config,
    wait_for_product_stock,
    wait_with_backoff,
)


NO_JITTER = WaitConfig(initial_interval=1.0, multiplier=2.0, max_interval=3.0, timeout=10.0, jitter=False)


class FakeClock:
    """Replaces time.monotonic/time.sleep so backoff runs instantly."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def monotonic(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock(monkeypatch):
    clock = FakeClock()
    monkeypatch.setattr("testsuites.api_testing.framework.wait_helpers.time.monotonic", clock.monotonic)
    return clock


def test_unknown_scenario_uses_default():
    assert get_wait_config("no_such_scenario") == get_wait_config("default")


def test_interval_growth_is_capped():
    assert calculate_next_interval(1.0, NO_JITTER) == 2.0
    assert calculate_next_interval(2.0, NO_JITTER) == 3.0


def test_jitter_stays_within_bounds():
    config = WaitConfig(multiplier=2.0, max_interval=100.0, jitter=True)
    for _ in range(50):
        assert 1.5 <= calculate_next_interval(1.0, config) <= 2.5


def test_returns_result_when_condition_met(clock):
    values = iter([(False, 1), (False, 2), (True, 3)])

    result = wait_with_backoff(lambda: next(values), config=NO_JITTER, sleep=clock.sleep)

    assert result == 3
    assert clock.sleeps == [1.0, 2.0]


def test_errors_are_retried(clock):
    calls = []

    def check():
        calls.append(1)
        if len(calls) == 1:
            raise ConnectionError("reset")
        return True, "ok"

    assert wait_with_backoff(check, config=NO_JITTER, sleep=clock.sleep) == "ok"


def test_timeout_carries_last_result(clock):
    with pytest.raises(WaitTimeoutError) as excinfo:
        wait_with_backoff(lambda: (False, 17), config=NO_JITTER, sleep=clock.sleep)

    assert excinfo.value.last_result == 17
    assert sum(clock.sleeps) <= NO_JITTER.timeout


def test_zero_timeout_checks_once(clock):
    calls = []

    def check():
        calls.append(1)
        return False, None

    with pytest.raises(WaitTimeoutError):
        wait_with_backoff(check, config=WaitConfig(timeout=0.0, jitter=False), sleep=clock.sleep)
    assert len(calls) == 1


def test_wait_for_product_stock(clock, monkeypatch):
    monkeypatch.setattr("testsuites.api_testing.framework.wait_helpers.time.sleep", clock.sleep)

    class FakeApi:
        def __init__(self):
            self.stocks = iter([50, 50, 48])

        def get_product(self, product_id):
            return {"id": product_id, "stock": next(self.stocks), "isActive": True}

    product = wait_for_product_stock(FakeApi(), 1, lambda stock: stock == 48)
    assert product == {"id": 1, "stock": 48, "isActive": True}
