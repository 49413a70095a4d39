"""
Pydantic models for the entities returned by the SoundCloud v2 API.

Only the fields the downloader needs are declared; everything else in the
payloads is ignored. Null fields fall back to their defaults so that partially
populated entities (e.g. playlist entries that only carry an id) still validate.
"""

from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field, field_validator

PROTOCOL_HLS = "hls"
POLICY_BLOCK = "BLOCK"
DEFAULT_MIME_TYPE = "audio/mpeg"

T = TypeVar("T")


class _Entity(BaseModel):
    """Base model that replaces JSON nulls with the field's default."""

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_default(cls, v, info):
        field = cls.model_fields.get(info.field_name)
        if v is None and field is not None:
            return field.get_default(call_default_factory=True)
        return v


class User(_Entity):
    username: str = ""
    kind: str = ""
    permalink: str = ""
    id: int = 0
    track_count: int = 0


class Format(_Entity):
    protocol: str = ""
    mime_type: str = ""


class Transcoding(_Entity):
    url: str = ""
    preset: str = ""
    quality: str = ""
    format: Format = Field(default_factory=Format)

    @property
    def is_hls(self) -> bool:
        return self.format.protocol == PROTOCOL_HLS


class Media(_Entity):
    transcodings: List[Transcoding] = Field(default_factory=list)

    def select_compatible(
        self, mime_type: str = DEFAULT_MIME_TYPE
    ) -> Optional[Transcoding]:
        """
        Returns the first HLS rendition encoded as `mime_type`, or None when the
        track offers no such rendition.
        """
        for transcoding in self.transcodings:
            if transcoding.is_hls and transcoding.format.mime_type == mime_type:
                return transcoding
        return None


class Track(_Entity):
    id: int = 0
    kind: str = ""
    permalink: str = ""
    title: str = ""
    genre: str = ""
    artwork_url: str = ""
    created_at: str = ""
    track_authorization: str = ""
    policy: str = ""
    user: User = Field(default_factory=User)
    media: Media = Field(default_factory=Media)

    @property
    def is_partial(self) -> bool:
        """Bulk playlist listings only populate the id of most entries."""
        return not self.title

    @property
    def is_blocked(self) -> bool:
        return self.policy == POLICY_BLOCK


class Playlist(_Entity):
    kind: str = ""
    permalink: str = ""
    tracks: List[Track] = Field(default_factory=list)


class Stream(_Entity):
    url: str = ""


class Paginated(BaseModel, Generic[T]):
    """One page of a cursor-based listing endpoint."""

    collection: List[T] = Field(default_factory=list)
    next_href: Optional[str] = ""

    @field_validator("next_href", mode="before")
    @classmethod
    def _null_cursor(cls, v):
        return v or ""


@dataclass(frozen=True)
class MissingTrack:
    """A playlist entry whose details must be backfilled, with its original position."""

    id: int
    index: int
