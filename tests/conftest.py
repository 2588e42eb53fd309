from typing import Iterable, List

import pytest


class ScriptedRng:
    """Random source that replays fixed ``randrange`` results."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values: List[int] = list(values)
        self.calls: List[int] = []

    def randrange(self, stop: int) -> int:
        if not self._values:
            raise AssertionError(f"ScriptedRng exhausted (randrange({stop}))")
        value = self._values.pop(0)
        assert 0 <= value < stop, f"scripted value {value} out of range({stop})"
        self.calls.append(stop)
        return value


@pytest.fixture()
def scripted_rng():
    return ScriptedRng
