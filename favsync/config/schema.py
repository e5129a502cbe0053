# favsync Configuration Schema
# Pydantic models for YAML configuration validation

import re
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

# Keeps the interval within what time.sleep accepts.
MAX_INTERVAL = 2**31 - 1

_COLLECTION_ID_RE = re.compile(r"[+-]?[0-9]+")


def parse_collection_id(key: str) -> int:
    """
    Parse a favorite-list key into a signed 64-bit collection identifier.

    Args:
        key: Identifier as written in the configuration file.

    Returns:
        The identifier as an int.

    Raises:
        ValueError: If the key is not a decimal integer within the i64 range.
    """
    if not _COLLECTION_ID_RE.fullmatch(key):
        raise ValueError(f"Invalid favorite list id: {key!r}")
    value = int(key)
    if not I64_MIN <= value <= I64_MAX:
        raise ValueError(f"Favorite list id out of 64-bit range: {key!r}")
    return value


class Credential(BaseModel):
    """Cookie material used to establish the Bilibili session."""

    model_config = ConfigDict(frozen=True)

    sessdata: str = Field(repr=False, description="SESSDATA cookie")
    bili_jct: str = Field(repr=False, description="bili_jct (CSRF) cookie")
    buvid3: str = Field(description="buvid3 device cookie")
    dedeuserid: str = Field(description="DedeUserID cookie")
    ac_time_value: str = Field(repr=False, description="ac_time_value refresh cookie")

    def cookie_string(self) -> str:
        """Render the cookie header the fav client expects."""
        return (
            f"SESSDATA={self.sessdata};"
            f"bili_jct={self.bili_jct};"
            f"buvid3={self.buvid3};"
            f"DedeUserID={self.dedeuserid};"
            f"ac_time_value={self.ac_time_value}"
        )


class SmtpConfig(BaseModel):
    """Mail transport settings for critical alerts."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(validation_alias=AliasChoices("url", "SMTP_URL"), description="smtps://host[:port]")
    sender_email: str = Field(validation_alias=AliasChoices("sender_email", "SENDER_EMAIL"))
    sender_password: str | None = Field(
        default=None,
        repr=False,
        validation_alias=AliasChoices("sender_password", "SENDER_PASSWORD"),
        description="Leave empty or 'null' to disable notifications",
    )
    recipient_email: str = Field(validation_alias=AliasChoices("recipient_email", "RECIPIENT_EMAIL"))


class ClientConfig(BaseModel):
    """Settings for the external fav client."""

    model_config = ConfigDict(frozen=True)

    binary: str = Field(default="fav", description="fav executable name or path")
    timeout: float | None = Field(default=None, gt=0, description="Per-call timeout in seconds")


class OutputConfig(BaseModel):
    """Output and logging configuration."""

    model_config = ConfigDict(frozen=True)

    verbose: bool = Field(default=False, description="Enable debug logging")
    colored: bool = Field(default=True, description="Enable colored output")
    log_file: str | None = Field(default=None, description="Path to log file")

    @field_validator("log_file")
    @classmethod
    def expand_optional_path(cls, v: str | None) -> str | None:
        """Expand ~ in optional paths."""
        if v is None:
            return None
        return str(Path(v).expanduser())


class SyncConfiguration(BaseModel):
    """Root configuration model for favsync."""

    model_config = ConfigDict(frozen=True)

    interval: int = Field(gt=0, le=MAX_INTERVAL, description="Seconds to sleep between sync rounds")
    credential: Credential = Field(description="Session cookies")
    smtp: SmtpConfig | None = Field(
        default=None,
        validation_alias=AliasChoices("smtp", "SMTP"),
        description="Optional alert channel",
    )
    favorite_list: dict[str, str] = Field(
        default_factory=dict, description="Favorite list id -> local directory"
    )
    client: ClientConfig = Field(default_factory=ClientConfig, description="fav client settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    @field_validator("favorite_list", mode="before")
    @classmethod
    def stringify_keys(cls, v: Any) -> Any:
        """YAML reads unquoted numeric ids as ints; keys are kept as strings."""
        if isinstance(v, dict):
            return {str(key): value for key, value in v.items()}
        return v

    @field_validator("favorite_list")
    @classmethod
    def check_ids(cls, v: dict[str, str]) -> dict[str, str]:
        """Reject ids that are not 64-bit integers."""
        for key in v:
            parse_collection_id(key)
        return v

    def collections(self) -> list[tuple[int, str]]:
        """Return (collection id, directory) pairs in configuration order."""
        return [(parse_collection_id(key), directory) for key, directory in self.favorite_list.items()]

    def target_directories(self) -> list[Path]:
        """Return the distinct target directories, expanded."""
        seen: dict[Path, None] = {}
        for directory in self.favorite_list.values():
            seen.setdefault(Path(directory).expanduser(), None)
        return list(seen)
