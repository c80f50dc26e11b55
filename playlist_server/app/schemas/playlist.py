"""
Pydantic models for playlists and their items.

An item is either a reference to a YouTube video (``type="youtube"``)
or an uploaded audio file (``type="mp3"``).  The ``type`` tag is the
discriminator used when the store document is parsed.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class VideoItem(BaseModel):
    """A remote video reference inside a playlist."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    type: Literal["youtube"] = "youtube"
    videoId: str
    title: str
    thumbnail: str = ""
    channelTitle: str = ""
    views: str = "0"
    duration: str = ""


class AudioItem(BaseModel):
    """An uploaded audio file inside a playlist."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    type: Literal["mp3"] = "mp3"
    filename: str
    originalName: str
    url: str


Item = Annotated[Union[VideoItem, AudioItem], Field(discriminator="type")]


class Playlist(BaseModel):
    """A named, ordered collection of items owned by one user."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str = Field(..., examples=["1718000000000_9f3a1c2b4d5e"])
    name: str = Field(..., examples=["Road Trip"])
    items: List[Item] = Field(default_factory=list)


class PlaylistCreate(BaseModel):
    """Body of ``POST /api/playlists``."""

    name: Optional[str] = Field(None, examples=["Road Trip"])


class VideoCreate(BaseModel):
    """Body of ``POST /api/playlists/{id}/videos``.

    Only ``videoId`` and ``title`` are required; the service checks them
    so that a missing value produces the usual ``{"error": ...}`` body.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    videoId: Optional[str] = Field(None, examples=["dQw4w9WgXcQ"])
    title: Optional[str] = Field(None, examples=["Never Gonna Give You Up"])
    thumbnail: Optional[str] = None
    channelTitle: Optional[str] = None
    views: Optional[str] = None
    duration: Optional[str] = None


class OkResponse(BaseModel):
    """Acknowledgement returned by mutating endpoints."""

    ok: bool = True
    already: Optional[bool] = None
