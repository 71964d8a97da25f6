"""Gravatar request, preset and fetch result models."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class PresetKey(str, Enum):
    """Parameters a preset may set, by canonical name."""

    size = "size"
    default_image = "default_image"
    max_rating = "max_rating"
    extension = "extension"
    force_default = "force_default"

    @property
    def alias(self) -> str:
        """One-letter spelling accepted in presets and Gravatar query strings."""
        return _ALIASES[self]


_ALIASES: dict[PresetKey, str] = {
    PresetKey.size: "s",
    PresetKey.default_image: "d",
    PresetKey.max_rating: "r",
    PresetKey.extension: "e",
    PresetKey.force_default: "f",
}

# Canonical name followed by its alias, for every key.
ALLOWED_PRESET_KEYS: tuple[str, ...] = tuple(
    spelling for key in PresetKey for spelling in (key.value, key.alias)
)


class ImageRequest(BaseModel):
    """Query parameters identifying one avatar."""

    email: Optional[str] = None
    preset: Optional[str] = None


class AvatarUrlResponse(BaseModel):
    """Response of the URL endpoint."""

    email: Optional[str] = None
    preset: Optional[str] = None
    url: str


class AvatarBase64Response(BaseModel):
    """Response of the base64 endpoint. data_url is null when the fetch failed."""

    email: Optional[str] = None
    preset: Optional[str] = None
    data_url: Optional[str] = None


class FailureReason(str, Enum):
    """Why a fetch produced no image."""

    status = "status"
    transport = "transport"


class FetchFailure(BaseModel):
    """Details of a failed avatar download."""

    reason: FailureReason
    url: Optional[str] = None
    status_code: Optional[int] = None
    error: Optional[str] = None


class FetchResult(BaseModel):
    """Outcome of fetch_as_data_url: either a data URL or a failure."""

    data_url: Optional[str] = None
    failure: Optional[FetchFailure] = None

    @property
    def ok(self) -> bool:
        return self.data_url is not None
