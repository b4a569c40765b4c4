"""Shared fixtures for service tests."""

import threading

import pytest

from bandvocoder.core.exceptions import DecodeError


class GatedEngine:
    """Engine stand-in that records job order and can hold a job mid-render."""

    def __init__(self, gated: bool = False) -> None:
        self.calls = []
        self.started = threading.Event()
        self.gate = threading.Event()
        if not gated:
            self.gate.set()

    def process(self, modulator: bytes, carrier: bytes, width: float) -> bytes:
        self.calls.append(modulator)
        self.started.set()
        self.gate.wait(timeout=10)
        if modulator == b"undecodable":
            raise DecodeError("Audio could not be decoded.", source="modulator")
        return b"RIFF" + modulator


@pytest.fixture
def fake_engine() -> GatedEngine:
    return GatedEngine()


@pytest.fixture
def gated_engine() -> GatedEngine:
    """Engine whose first job blocks until gate.set() is called."""
    engine = GatedEngine(gated=True)
    yield engine
    engine.gate.set()
