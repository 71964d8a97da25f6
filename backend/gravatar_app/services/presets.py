"""Preset resolution and application.

A preset is a named mapping of image parameters kept in configuration::

    {
        "default_preset": "small",
        "presets": {
            "small": {"size": 40, "d": "identicon"},
            "large": {"s": 512, "max_rating": "pg"},
        },
    }
"""
from collections.abc import Mapping
from typing import Any, NamedTuple, Optional, TypeVar

from gravatar_app.core.exceptions import ConfigurationError, InvalidPresetKeyError
from gravatar_app.models.gravatar import ALLOWED_PRESET_KEYS, PresetKey
from gravatar_app.services.builder import GravatarImage

T = TypeVar("T", bound=GravatarImage)

# Every accepted spelling mapped to the builder method it calls. One-letter
# aliases call the alias method as is; long names call set_<name>.
PRESET_SETTERS: dict[str, str] = {}
for _key in PresetKey:
    PRESET_SETTERS[_key.value] = f"set_{_key.value}"
    PRESET_SETTERS[_key.alias] = _key.alias
del _key


class ResolvedPreset(NamedTuple):
    """Preset selected for an image. name is None when no preset applies."""

    name: Optional[str]
    parameters: Mapping[str, Any]


def resolve_preset(config: Mapping[str, Any], requested: Optional[str] = None) -> ResolvedPreset:
    """Look up the parameters of ``requested``, falling back to the default preset.

    Args:
        config: Mapping with ``presets`` and optional ``default_preset``.
        requested: Preset name chosen by the caller, if any.

    Returns:
        The resolved preset name and its parameter mapping, unchanged.
        Both are empty when nothing is requested and no default is configured.

    Raises:
        ConfigurationError: When the presets table, the named preset or its
            values are missing or not mappings.
    """
    name = requested
    if name is None:
        name = config.get("default_preset")
        if not name:
            return ResolvedPreset(None, {})

    presets = config.get("presets")
    if not presets or not isinstance(presets, Mapping):
        raise ConfigurationError("Unable to retrieve Gravatar presets array configuration.")

    if name not in presets:
        raise ConfigurationError(
            f'Unable to retrieve Gravatar preset values, "{name}" is probably a wrong preset name.'
        )

    parameters = presets[name]
    if not parameters or not isinstance(parameters, Mapping):
        raise ConfigurationError(f'Unable to retrieve Gravatar "{name}" preset values.')

    return ResolvedPreset(name, parameters)


def apply_preset(parameters: Mapping[str, Any], target: T) -> T:
    """Push preset parameters into ``target`` through its setters, in order.

    One-letter keys call the alias method of the same name, longer keys
    call ``set_<key>``.

    Raises:
        InvalidPresetKeyError: On the first key outside the allow-list.
            Keys before it have already been applied; later keys are not.
    """
    for key, value in parameters.items():
        method = PRESET_SETTERS.get(key) if isinstance(key, str) else None
        if method is None:
            raise InvalidPresetKeyError(key, ALLOWED_PRESET_KEYS)
        getattr(target, method)(value)
    return target
