"""Gravatar image with configuration-driven presets."""
from collections.abc import Mapping
from typing import Any, Optional, Union

from gravatar_app.core.logging import setup_logging
from gravatar_app.services.builder import GravatarImage
from gravatar_app.services.fetcher import DEFAULT_TIMEOUT, fetch_as_data_url
from gravatar_app.services.presets import apply_preset, resolve_preset

logger = setup_logging(__name__)


class Image(GravatarImage):
    """Avatar of one email address, optionally shaped by a named preset.

    The preset (or the configured default preset when none is set) is
    resolved and applied each time a URL is built, so a preset can be chosen
    after construction.
    """

    def __init__(
        self,
        config: Mapping[str, Any],
        email: Optional[str] = None,
        preset_name: Optional[str] = None,
    ) -> None:
        super().__init__(email)
        self._config = config
        self._preset_name: Optional[str] = None
        if preset_name is not None:
            self.set_preset(preset_name)

    def preset(self, preset_name: Optional[str] = None) -> Union["Image", str, None]:
        """Get the preset name, or set it and return the image."""
        if preset_name is None:
            return self.get_preset()
        return self.set_preset(preset_name)

    def get_preset(self) -> Optional[str]:
        return self._preset_name

    def set_preset(self, preset_name: Optional[str]) -> "Image":
        self._preset_name = preset_name
        return self

    def applied_preset(self) -> Optional[str]:
        """Name of the preset url() would apply, taking the default into account."""
        if self._preset_name is not None:
            return self._preset_name
        return self._config.get("default_preset") or None

    def url(self) -> str:
        """Build the avatar URL after applying the preset.

        Raises:
            ConfigurationError: When the preset configuration is wrong.
            InvalidPresetKeyError: When the preset has an unknown key.
        """
        self._apply_preset()
        return self.build_url()

    def to_base64(self, timeout: float = DEFAULT_TIMEOUT) -> Optional[str]:
        """Download the avatar and return it as a PNG data URL, or None on failure."""
        try:
            url = self.url()
        except Exception as exc:
            logger.warning(
                "Failed to convert Gravatar to base64",
                extra={"email": self.get_email(), "url": None, "error": str(exc)},
            )
            return None
        return fetch_as_data_url(url, timeout=timeout, email=self.get_email()).data_url

    def _apply_preset(self) -> "Image":
        resolved = resolve_preset(self._config, self._preset_name)
        if not resolved.parameters:
            return self
        return apply_preset(resolved.parameters, self)
