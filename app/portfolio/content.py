"""Portfolio content records and their mapping onto layout items.

Storage lives elsewhere; these records mirror the JSON documents the site
stores (camelCase keys) and are only what the grids need.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Tuple

from app.portfolio.layout.ratios import LayoutItem

GALLERY_FALLBACK_WIDTH = 800
GALLERY_FALLBACK_HEIGHT = 600
PROJECT_ASPECT_RATIO = 1.5


@dataclass(frozen=True)
class GalleryImage:
    src: str
    width: Optional[float] = None
    height: Optional[float] = None
    id: Optional[str] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class GalleryCollection:
    id: str
    title: str
    location: str = ""
    date: str = ""
    images: Tuple[GalleryImage, ...] = ()


@dataclass(frozen=True)
class PlaygroundItem:
    id: str
    title: str
    src: str
    width: float
    height: float
    tag: str = ""


@dataclass(frozen=True)
class PlaygroundSection:
    id: str
    title: str
    description: str = ""
    items: Tuple[PlaygroundItem, ...] = ()


@dataclass(frozen=True)
class Project:
    id: str
    title: str
    category: str
    year: str
    image_url: str
    description: str = ""
    display_order: Optional[int] = None
    featured: bool = False
    tools: Tuple[str, ...] = field(default=())


def gallery_layout_items(collection: GalleryCollection) -> List[LayoutItem]:
    """Photos without recorded dimensions are laid out as 4:3."""
    out: List[LayoutItem] = []
    for index, image in enumerate(collection.images):
        out.append(
            LayoutItem(
                key=image.id or f"{collection.id}-{index}",
                width=image.width or GALLERY_FALLBACK_WIDTH,
                height=image.height or GALLERY_FALLBACK_HEIGHT,
                payload=image,
            )
        )
    return out


def playground_layout_items(section: PlaygroundSection) -> List[LayoutItem]:
    return [
        LayoutItem(key=item.id, width=item.width, height=item.height, payload=item)
        for item in section.items
    ]


def project_layout_items(projects: Iterable[Project]) -> List[LayoutItem]:
    """Projects all get the same 1.5:1 tile; cover art varies too much otherwise."""

    ordered = sorted(
        projects,
        key=lambda p: (p.display_order is None, p.display_order if p.display_order is not None else 0),
    )
    return [
        LayoutItem(key=p.id, aspect_ratio_hint=PROJECT_ASPECT_RATIO, payload=p)
        for p in ordered
    ]


def gallery_image_from_dict(data: dict[str, Any]) -> GalleryImage:
    return GalleryImage(
        src=str(data.get("src", "")),
        width=data.get("width"),
        height=data.get("height"),
        id=data.get("id"),
        title=data.get("title"),
    )


def gallery_collection_from_dict(data: dict[str, Any]) -> GalleryCollection:
    return GalleryCollection(
        id=str(data["id"]),
        title=str(data.get("title", "")),
        location=str(data.get("location", "")),
        date=str(data.get("date", "")),
        images=tuple(gallery_image_from_dict(d) for d in data.get("images", [])),
    )


def playground_section_from_dict(data: dict[str, Any]) -> PlaygroundSection:
    items = tuple(
        PlaygroundItem(
            id=str(d["id"]),
            title=str(d.get("title", "")),
            src=str(d.get("src", "")),
            width=d.get("width"),
            height=d.get("height"),
            tag=str(d.get("tag", "")),
        )
        for d in data.get("items", [])
    )
    return PlaygroundSection(
        id=str(data["id"]),
        title=str(data.get("title", "")),
        description=str(data.get("description", "")),
        items=items,
    )


def project_from_dict(data: dict[str, Any]) -> Project:
    order = data.get("displayOrder")
    return Project(
        id=str(data["id"]),
        title=str(data.get("title", "")),
        category=str(data.get("category", "")),
        year=str(data.get("year", "")),
        image_url=str(data.get("imageUrl", "")),
        description=str(data.get("description", "")),
        display_order=int(order) if order is not None else None,
        featured=bool(data.get("featured", False)),
        tools=tuple(data.get("tools") or ()),
    )
