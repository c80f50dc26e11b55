"""
Playlist endpoints.

Every route requires a session; a caller can only see and change its
own playlists.  A playlist id that belongs to someone else is reported
as not found.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from ..dependencies import get_playlist_service, get_upload_service
from ...core.security import require_session
from ...schemas.playlist import OkResponse, Playlist, PlaylistCreate, VideoCreate
from ...services.playlist_service import PlaylistService
from ...services.upload_service import UploadService


router = APIRouter()


@router.get("", response_model=List[Playlist])
def list_playlists(
    username: str = Depends(require_session),
    service: PlaylistService = Depends(get_playlist_service),
) -> List[Playlist]:
    return service.list_playlists(username)


@router.post("", response_model=Playlist)
def create_playlist(
    body: PlaylistCreate,
    username: str = Depends(require_session),
    service: PlaylistService = Depends(get_playlist_service),
) -> Playlist:
    """Create an empty playlist.

    Names are trimmed and must be unique per user, ignoring case.
    """
    return service.create_playlist(username, body.name)


@router.delete("/{playlist_id}", response_model=OkResponse, response_model_exclude_none=True)
def delete_playlist(
    playlist_id: str,
    username: str = Depends(require_session),
    service: PlaylistService = Depends(get_playlist_service),
) -> OkResponse:
    """Delete a playlist.  Unknown ids are not an error."""
    service.delete_playlist(username, playlist_id)
    return OkResponse()


@router.post("/{playlist_id}/videos", response_model=OkResponse, response_model_exclude_none=True)
def add_video(
    playlist_id: str,
    body: VideoCreate,
    username: str = Depends(require_session),
    service: PlaylistService = Depends(get_playlist_service),
) -> OkResponse:
    """Append a video; a video already in the playlist yields ``already: true``."""
    added = service.add_video(username, playlist_id, body)
    if not added:
        return OkResponse(already=True)
    return OkResponse()


@router.delete(
    "/{playlist_id}/videos/{video_id}",
    response_model=OkResponse,
    response_model_exclude_none=True,
)
def remove_video(
    playlist_id: str,
    video_id: str,
    username: str = Depends(require_session),
    service: PlaylistService = Depends(get_playlist_service),
) -> OkResponse:
    service.remove_video(username, playlist_id, video_id)
    return OkResponse()


@router.post("/{playlist_id}/mp3", response_model=OkResponse, response_model_exclude_none=True)
def upload_mp3(
    playlist_id: str,
    mp3: Optional[UploadFile] = File(None),
    username: str = Depends(require_session),
    service: UploadService = Depends(get_upload_service),
) -> OkResponse:
    """Upload an audio file (multipart field ``mp3``) into the playlist."""
    if mp3 is None:
        service.upload_audio(username, playlist_id, None, None)
    else:
        try:
            service.upload_audio(username, playlist_id, mp3.file, mp3.filename)
        finally:
            mp3.file.close()
    return OkResponse()
