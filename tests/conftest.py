import pytest


class FixedRandom:
    """Random source replaying a fixed sequence of draws."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def fixed_random():
    return FixedRandom
