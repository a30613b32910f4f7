"""Errors raised while decoding ULIDs and building resource identifiers."""


class DecodeError(ValueError):
    """Text could not be decoded into a ULID."""


class InvalidLength(DecodeError):
    def __init__(self, length: int, expected: int = 26):
        super().__init__(f"invalid length: expected {expected} characters, got {length}")
        self.length = length
        self.expected = expected


class InvalidCharacter(DecodeError):
    def __init__(self, character: str, position: int):
        super().__init__(f"invalid character {character!r} at position {position}")
        self.character = character
        self.position = position


class ResourceIDError(ValueError):
    """Base error for resource identifier construction and parsing."""


class InvalidIdentifierResourceLength(ResourceIDError):
    def __init__(self, resource: str):
        super().__init__(f"Invalid resource type on identifier: {resource}")
        self.resource = resource


class UnableToDecodeUlid(ResourceIDError):
    def __init__(self, inner: DecodeError):
        super().__init__(f"Unable to decode internal Ulid: {inner}")
        self.inner = inner
