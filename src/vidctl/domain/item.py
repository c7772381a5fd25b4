"""Item: the persisted production record for one video.

Field names map 1:1 to keys in the YAML document. ``path`` is the
resolved storage location and is never written into the document.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from vidctl.domain.stages import Stage, StageState

DEFAULT_DATE_FORMAT = "%Y-%m-%dT%H:%M"


class Sponsorship(BaseModel):
    """Sponsorship details. A non-blank ``blocked`` reason blocks the item."""

    model_config = {"frozen": True}

    amount: str = ""
    emails: str = ""
    blocked: str = ""


class IndexEntry(BaseModel):
    """Lightweight existence record kept in the catalog index."""

    model_config = {"frozen": True}

    name: str
    category: str


class Item(BaseModel):
    """A single tracked video."""

    model_config = {"frozen": True, "extra": "ignore"}

    name: str
    category: str
    path: str | None = Field(default=None, exclude=True)

    # --- Stages ---
    initiation: StageState = Field(default_factory=StageState)
    material: StageState = Field(default_factory=StageState)
    definition: StageState = Field(default_factory=StageState)
    edit: StageState = Field(default_factory=StageState)
    publish: StageState = Field(default_factory=StageState)

    # --- Overrides ---
    delayed: bool = False
    sponsorship: Sponsorship = Field(default_factory=Sponsorship)

    # --- Metadata ---
    date: str = ""
    title: str = ""
    description: str = ""
    highlight: str = ""
    tags: str = ""
    description_tags: str = ""
    tweet: str = ""
    animations: str = ""
    gist: str = ""
    project_name: str = ""
    project_url: str = ""
    location: str = ""
    tagline: str = ""
    tagline_ideas: str = ""
    other_logos: str = ""
    thumbnail: str = ""
    members: str = ""
    timecodes: str = ""
    language: str = ""
    related_videos: str = ""
    upload_video: str = ""
    video_id: str = ""
    hugo_path: str = ""
    repo: str = ""

    # --- Work flags ---
    code: bool = False
    head: bool = False
    screen: bool = False
    diagrams: bool = False
    screenshots: bool = False
    thumbnails: bool = False
    request_thumbnail: bool = False
    request_edit: bool = False
    movie: bool = False
    slides: bool = False

    # --- Posted flags ---
    slack_posted: bool = False
    email_posted: bool = False
    calendar_posted: bool = False
    linkedin_posted: bool = False
    hn_posted: bool = False
    bluesky_posted: bool = False
    notified_sponsors: bool = False

    @field_validator("date", mode="before")
    @classmethod
    def _date_as_text(cls, value: Any) -> Any:
        """Accept YAML timestamps written by hand and keep them as text."""
        if isinstance(value, datetime):
            return value.strftime(DEFAULT_DATE_FORMAT)
        if isinstance(value, date):
            return value.isoformat()
        if value is None:
            return ""
        return value

    @property
    def key(self) -> IndexEntry:
        """The (name, category) identity of this item."""
        return IndexEntry(name=self.name, category=self.category)

    @property
    def sponsorship_blocked(self) -> bool:
        return bool(self.sponsorship.blocked.strip())

    def stage(self, stage: Stage) -> StageState:
        """Return the state of *stage*."""
        state: StageState = getattr(self, stage.value)
        return state


def parse_publish_date(value: str, fmt: str = DEFAULT_DATE_FORMAT) -> datetime:
    """Parse a publish date, falling back to ``datetime.min`` when unparsable.

    Hand-written YAML timestamps are stored in ``DEFAULT_DATE_FORMAT`` by
    the date validator, so that format is accepted whatever *fmt* is.
    """
    text = value.strip()
    for candidate in dict.fromkeys((fmt, DEFAULT_DATE_FORMAT)):
        try:
            return datetime.strptime(text, candidate)
        except ValueError:
            continue
    return datetime.min


_READ_ONLY_FIELDS = frozenset({"name", "category", "path"})


def apply_changes(item: Item, changes: dict[str, str]) -> Item:
    """Return a validated copy of *item* with *changes* applied.

    Keys may be dotted to reach nested fields (``sponsorship.blocked``,
    ``edit.done``). Values are raw strings and are coerced by the model.
    Raises ``ValueError`` for unknown or read-only keys and for values
    that fail validation.
    """
    data = item.model_dump()
    for key, value in changes.items():
        top, _, rest = key.partition(".")
        if top in _READ_ONLY_FIELDS:
            raise ValueError(f"Field {top!r} cannot be changed with update; use move")
        if top not in Item.model_fields:
            raise ValueError(f"Unknown field {key!r}")
        if not rest:
            data[top] = value
            continue
        nested = data.get(top)
        if not isinstance(nested, dict) or rest not in nested:
            raise ValueError(f"Unknown field {key!r}")
        nested[rest] = value
    # ValidationError subclasses ValueError
    updated = Item.model_validate({**data, "name": item.name, "category": item.category})
    return updated.model_copy(update={"path": item.path})
