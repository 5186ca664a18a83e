# core/models/post.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class Post:
    """A post being edited locally.

    local_id:           local integer id (the editor's handle for the post)
    featured_image_id:  remote media id of the featured image, 0 when unset
    remote_id:          id on the site once the post has been published, 0 otherwise
    """

    local_id: int
    featured_image_id: int = 0
    remote_id: int = 0
    local_site_id: int = 0
    title: str = ""

    def has_featured_image(self) -> bool:
        return self.featured_image_id > 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Post:
        return cls(
            local_id=int(data["local_id"]),
            featured_image_id=int(data.get("featured_image_id") or 0),
            remote_id=int(data.get("remote_id") or 0),
            local_site_id=int(data.get("local_site_id") or 0),
            title=data.get("title") or "",
        )
