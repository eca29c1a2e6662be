"""Shared fixtures: headless pygame, a host with its own registry, games."""
import os

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pytest

from kigames.document import Document
from kigames.elements import ElementRegistry
from kigames.host import Host
from kigames.logging import NullSink, register_sink
from models import InvadersConfig


class FixedRng:
    """Random source with scripted draws."""

    def __init__(self, value: float = 0.0, index: int = 0):
        self.value = value
        self.index = index

    def random(self) -> float:
        return self.value

    def randrange(self, stop: int) -> int:
        return min(self.index, stop - 1)


class RecordingSink(NullSink):
    """Sink that keeps every structured record."""

    def __init__(self):
        self.records = []

    def emit(self, module, record):
        self.records.append((module, record))


@pytest.fixture
def registry():
    return ElementRegistry()


@pytest.fixture
def document():
    return Document()


@pytest.fixture
def host(document, registry):
    host = Host(document, registry)
    yield host
    host.shutdown()


@pytest.fixture
def config():
    """Default tuning with invader fire switched off."""
    return InvadersConfig(invader_fire_rate=1.0)


@pytest.fixture
def game(host, config):
    from games.Invaders.game_mode import InvadersGame

    game = InvadersGame(config=config, rng=FixedRng(0.0))
    host.connect(game)
    return game


@pytest.fixture
def invaders_records():
    sink = RecordingSink()
    register_sink('invaders', sink)
    yield sink.records
    register_sink('invaders', NullSink())
