"""Exceptions raised while building Gravatar URLs."""
from typing import Sequence


class GravatarError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(GravatarError, ValueError):
    """Preset configuration is missing or malformed."""


class InvalidPresetKeyError(ConfigurationError):
    """A preset uses a key that does not map to any image setter."""

    def __init__(self, key: object, allowed_keys: Sequence[str]) -> None:
        self.key = key
        self.allowed_keys = tuple(allowed_keys)
        super().__init__(
            f'Gravatar image could not find method to use "{key}" key. '
            'Allowed preset keys are: "{}".'.format('", "'.join(self.allowed_keys))
        )
