# core/models/site.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class Site:
    """A site that posts and media belong to.

    Photon (remote image resizing) is only available to public sites that are
    either hosted on WordPress.com or connected through Jetpack.
    """

    id: int
    url: str = ""
    is_wpcom: bool = False
    is_jetpack_connected: bool = False
    is_private: bool = False

    @property
    def photon_capable(self) -> bool:
        return (self.is_wpcom or self.is_jetpack_connected) and not self.is_private

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Site:
        return cls(
            id=int(data["id"]),
            url=data.get("url") or "",
            is_wpcom=bool(data.get("is_wpcom", False)),
            is_jetpack_connected=bool(data.get("is_jetpack_connected", False)),
            is_private=bool(data.get("is_private", False)),
        )
