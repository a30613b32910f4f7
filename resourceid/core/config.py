"""Library configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings

ULID_TEXT_LENGTH = 26


class Settings(BaseSettings):
    # Width of the resource tag prefix; parse splits at this offset
    tag_length: int = Field(default=4, ge=1)

    # Remap Crockford lookalikes (I/L -> 1, O -> 0) when parsing
    correct_ambiguous: bool = False

    @property
    def text_length(self) -> int:
        return self.tag_length + ULID_TEXT_LENGTH

    model_config = {"env_file": ".env", "env_prefix": "RESOURCEID_", "extra": "ignore"}


settings = Settings()
