"""ULID generation and Crockford base32 text codec.

A ULID is a 128-bit value:
- 48 bits: timestamp, milliseconds since the Unix epoch (high-order bits)
- 80 bits: cryptographically random data

The canonical text form is 26 characters from the Crockford base32 alphabet
(digits and uppercase letters without I, L, O, U). Because the timestamp
occupies the high-order bits and the alphabet is in ascending order, ULIDs
created in later milliseconds sort after earlier ones as plain strings.
ULIDs created within the same millisecond have no guaranteed order.
"""

import logging
import os
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from resourceid.core.config import ULID_TEXT_LENGTH
from resourceid.core.errors import InvalidCharacter, InvalidLength

logger = logging.getLogger(__name__)

ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"

TIMESTAMP_BITS = 48
RANDOMNESS_BITS = 80
RANDOMNESS_BYTES = RANDOMNESS_BITS // 8

_TIMESTAMP_MASK = (1 << TIMESTAMP_BITS) - 1
_RANDOMNESS_MASK = (1 << RANDOMNESS_BITS) - 1
_MAX_VALUE = (1 << 128) - 1

# 26 symbols carry 130 bits, so the leading symbol may only use the low 3
_MAX_LEADING_INDEX = 7

_DECODE_TABLE = {ch: i for i, ch in enumerate(ALPHABET)}
_DECODE_TABLE.update({ch.lower(): i for i, ch in enumerate(ALPHABET)})

# Crockford lookalikes, only honoured when correction is requested
_AMBIGUOUS = {"I": "1", "i": "1", "L": "1", "l": "1", "O": "0", "o": "0"}

RandomSource = Callable[[int], bytes]
Clock = Callable[[], int]


def _wall_clock_ms() -> int:
    """Current time in milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True, order=True)
class Ulid:
    value: int

    def __post_init__(self):
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(f"Ulid value must be an int, got {type(self.value).__name__}")
        if not 0 <= self.value <= _MAX_VALUE:
            raise ValueError(f"Ulid value out of 128-bit range: {self.value}")

    @classmethod
    def new(cls) -> "Ulid":
        return default_generator.generate()

    @classmethod
    def nil(cls) -> "Ulid":
        return cls(0)

    @classmethod
    def from_parts(cls, timestamp_ms: int, randomness: int) -> "Ulid":
        """Build a ULID from its timestamp and randomness fields.

        Both fields are masked to their widths (48 and 80 bits).
        """
        return cls(((timestamp_ms & _TIMESTAMP_MASK) << RANDOMNESS_BITS) | (randomness & _RANDOMNESS_MASK))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Ulid":
        if len(data) != 16:
            raise ValueError(f"Ulid requires 16 bytes, got {len(data)}")
        return cls(int.from_bytes(data, byteorder="big"))

    @classmethod
    def from_str(cls, text: str, correct_ambiguous: bool = False) -> "Ulid":
        return decode(text, correct_ambiguous=correct_ambiguous)

    @property
    def timestamp_ms(self) -> int:
        return self.value >> RANDOMNESS_BITS

    @property
    def randomness(self) -> int:
        return self.value & _RANDOMNESS_MASK

    @property
    def datetime(self) -> datetime:
        """Creation time as a timezone-aware UTC datetime (millisecond precision)."""
        seconds, millis = divmod(self.timestamp_ms, 1000)
        return datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(milliseconds=millis)

    def to_bytes(self) -> bytes:
        return self.value.to_bytes(16, byteorder="big")

    def __str__(self) -> str:
        return encode(self)

    def __repr__(self) -> str:
        return f"Ulid({encode(self)!r})"


class UlidGenerator:
    """Creates ULIDs from an injected clock and random source.

    The generator keeps no mutable state, so one instance can be shared
    between threads as long as the random source itself is thread-safe
    (``os.urandom`` is).
    """

    def __init__(self, random_source: Optional[RandomSource] = None, clock: Optional[Clock] = None):
        self._random_source = random_source or os.urandom
        self._clock = clock or _wall_clock_ms

    def generate(self) -> Ulid:
        timestamp_ms = self._clock()
        if not 0 <= timestamp_ms <= _TIMESTAMP_MASK:
            raise ValueError(f"Clock value {timestamp_ms} does not fit in {TIMESTAMP_BITS} bits")
        random_bytes = self._random_source(RANDOMNESS_BYTES)
        if len(random_bytes) != RANDOMNESS_BYTES:
            raise ValueError(
                f"Random source returned {len(random_bytes)} bytes, expected {RANDOMNESS_BYTES}"
            )
        return Ulid.from_parts(timestamp_ms, int.from_bytes(random_bytes, byteorder="big"))


default_generator = UlidGenerator()


def generate() -> Ulid:
    """Generate a ULID from the current wall-clock time and os.urandom."""
    return default_generator.generate()


def encode(ulid: Ulid) -> str:
    """Render a ULID as 26 Crockford base32 characters, most significant first."""
    value = ulid.value
    chars = []
    for _ in range(ULID_TEXT_LENGTH):
        chars.append(ALPHABET[value & 31])
        value >>= 5
    return "".join(reversed(chars))


def decode(text: str, correct_ambiguous: bool = False) -> Ulid:
    """Decode 26 Crockford base32 characters into a ULID.

    Input is case-insensitive. Lookalike characters (I, L, O) are rejected
    unless ``correct_ambiguous`` is set, in which case they are read as the
    digits 1, 1 and 0. U is always rejected.

    Raises:
        InvalidLength: text is not exactly 26 characters.
        InvalidCharacter: a character is outside the alphabet, or the leading
            character would overflow 128 bits.
    """
    if len(text) != ULID_TEXT_LENGTH:
        raise InvalidLength(len(text), ULID_TEXT_LENGTH)

    value = 0
    for position, ch in enumerate(text):
        if correct_ambiguous:
            ch = _AMBIGUOUS.get(ch, ch)
        index = _DECODE_TABLE.get(ch)
        if index is None:
            raise InvalidCharacter(text[position], position)
        if position == 0 and index > _MAX_LEADING_INDEX:
            raise InvalidCharacter(text[position], position)
        value = (value << 5) | index

    return Ulid(value)


def is_valid(text: str) -> bool:
    """Check whether text decodes as a ULID under the strict policy."""
    if not isinstance(text, str):
        return False
    try:
        decode(text)
    except (InvalidLength, InvalidCharacter) as e:
        logger.debug(f"Rejected ULID text {text!r}: {e}")
        return False
    return True
