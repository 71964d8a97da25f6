"""GravatarService: application-wide factory for Image objects."""
from collections.abc import Mapping
from typing import Any, Optional

from gravatar_app.core.config import Settings
from gravatar_app.services.image import Image


class GravatarService:
    """Hands out Image objects bound to the configured presets.

    One instance is registered on ``app.state.gravatar`` at startup. Images
    are not shared between requests; ``image()`` always returns a new one.
    """

    def __init__(self, config: Mapping[str, Any], timeout: float = 5) -> None:
        self.config = config
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "GravatarService":
        return cls(settings.gravatar_config(), timeout=settings.gravatar_timeout)

    def image(self, email: Optional[str] = None, preset: Optional[str] = None) -> Image:
        return Image(self.config, email=email, preset_name=preset)

    def presets(self) -> list[str]:
        """Names of the configured presets."""
        presets = self.config.get("presets")
        return list(presets) if isinstance(presets, Mapping) else []
