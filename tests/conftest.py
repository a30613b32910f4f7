"""Shared test fixtures for the resourceid test suite."""

import itertools
from typing import Callable, Sequence

import pytest

from resourceid.core.ulid import UlidGenerator

# Reference vector: timestamp 1469918176385 encodes to "01ARYZ6S41"
REFERENCE_TIMESTAMP = 1_469_918_176_385
COUNTING_BYTES = bytes(range(10))
REFERENCE_ULID_TEXT = "01ARYZ6S41000G40R40M30E209"


def fixed_random(data: bytes = COUNTING_BYTES) -> Callable[[int], bytes]:
    """Random source that always returns the first ``n`` bytes of ``data``."""
    def source(n: int) -> bytes:
        return data[:n]
    return source


def make_generator(
    timestamps: Sequence[int] = (REFERENCE_TIMESTAMP,),
    data: bytes = COUNTING_BYTES,
) -> UlidGenerator:
    """Generator with a scripted clock (the last timestamp repeats) and fixed randomness."""
    timestamps = list(timestamps)
    ticks = itertools.chain(timestamps, itertools.repeat(timestamps[-1]))
    return UlidGenerator(random_source=fixed_random(data), clock=lambda: next(ticks))


@pytest.fixture
def fixed_generator():
    return make_generator()
