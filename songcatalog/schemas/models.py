from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class SongCreate(BaseModel):
    """Inbound payload for POST /songs. Only the natural key is caller-supplied."""
    group: str = Field(..., description="Performing artist")
    song: str = Field(..., description="Track title")

    @field_validator("group", "song")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class SongRecord(BaseModel):
    id: Optional[int] = None  # store-assigned
    group: str
    song: str
    release_date: str = ""
    text: str = ""
    link: str = ""
    album_cover_url: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def is_complete(self) -> bool:
        return all([self.group, self.song, self.release_date, self.text, self.link, self.album_cover_url])


class SongSummary(BaseModel):
    id: int
    group: str
    song: str


class SongSaved(BaseModel):
    id: int


class ErrorResponse(BaseModel):
    error: str
