"""Setter-style Gravatar image URL builder backed by libgravatar."""
from typing import Any, Optional
from urllib.parse import urlsplit, urlunsplit

from libgravatar import Gravatar

DEFAULT_SIZE = 80
EXTENSIONS = ("jpg", "jpeg", "gif", "png", "webp")


class GravatarImage:
    """Collects avatar parameters and renders them into a Gravatar URL.

    Hashing, query-string encoding and value checks for size, default image
    and rating are done by ``libgravatar`` when the URL is built. Every setter
    returns ``self`` and has a one-letter alias matching the Gravatar query
    parameter (``s``, ``d``, ``r``, ``e``, ``f``).
    """

    def __init__(self, email: Optional[str] = None) -> None:
        self._email = email
        self._size: Optional[int] = None
        self._default_image: Optional[str] = None
        self._max_rating: Optional[str] = None
        self._extension: Optional[str] = None
        self._force_default = False

    def get_email(self) -> Optional[str]:
        return self._email

    def set_email(self, email: Optional[str]) -> "GravatarImage":
        self._email = email
        return self

    def get_size(self) -> Optional[int]:
        return self._size

    def set_size(self, size: Any) -> "GravatarImage":
        self._size = None if size is None else int(size)
        return self

    def get_default_image(self) -> Optional[str]:
        return self._default_image

    def set_default_image(self, default_image: Any) -> "GravatarImage":
        self._default_image = None if default_image is None else str(default_image)
        return self

    def get_max_rating(self) -> Optional[str]:
        return self._max_rating

    def set_max_rating(self, rating: Optional[str]) -> "GravatarImage":
        self._max_rating = None if rating is None else str(rating).lower()
        return self

    def get_extension(self) -> Optional[str]:
        return self._extension

    def set_extension(self, extension: Optional[str]) -> "GravatarImage":
        if extension is not None:
            extension = str(extension).lower().lstrip(".")
            if extension not in EXTENSIONS:
                raise ValueError(
                    f'Invalid image extension "{extension}", expected one of: {", ".join(EXTENSIONS)}.'
                )
        self._extension = extension
        return self

    def get_force_default(self) -> bool:
        return self._force_default

    def set_force_default(self, force_default: Any) -> "GravatarImage":
        self._force_default = bool(force_default)
        return self

    # Aliases named after the Gravatar query parameters.
    s = set_size
    d = set_default_image
    r = set_max_rating
    e = set_extension
    f = set_force_default

    def state(self) -> dict[str, Any]:
        """Return the current parameters, keyed by canonical name."""
        return {
            "size": self._size,
            "default_image": self._default_image,
            "max_rating": self._max_rating,
            "extension": self._extension,
            "force_default": self._force_default,
        }

    def build_url(self, email: Optional[str] = None) -> str:
        """Build the HTTPS avatar URL for ``email`` (or the builder's own email).

        Raises:
            ValueError: When libgravatar rejects the size, default image or rating.
        """
        if email is None:
            email = self._email
        url = Gravatar(email or "").get_image(
            size=self._size if self._size is not None else DEFAULT_SIZE,
            default=self._default_image or "",
            force_default=self._force_default,
            rating=self._max_rating or "",
            use_ssl=True,
        )
        if not self._extension:
            return url
        parts = urlsplit(url)
        return urlunsplit(parts._replace(path=f"{parts.path}.{self._extension}"))
