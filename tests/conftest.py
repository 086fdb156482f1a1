import pytest

from watchparty.config import PartyConfig
from watchparty.coordinator import Coordinator


class FakeClock:
    def __init__(self, start: int = 1_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config():
    return PartyConfig(default_video_id="default-video")


@pytest.fixture
def coordinator(config, clock):
    return Coordinator(config=config, clock=clock)
