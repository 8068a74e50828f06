from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from songcatalog.schemas.models import ErrorResponse, SongCreate, SongRecord, SongSaved, SongSummary
from songcatalog.services.song_service import SongService
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_song_service(request: Request) -> SongService:
    return request.app.state.song_service


@router.get("/songs", response_model=List[SongSummary], summary="List songs")
async def list_songs(
    group: Optional[str] = None,
    song: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    service: SongService = Depends(get_song_service)
):
    """Filters are case-insensitive substring matches."""
    return await service.list_songs(group=group, song=song, limit=limit, offset=offset)


@router.get("/songs/{song_id}", response_model=SongRecord, responses=ERRORS, summary="Song details")
async def get_song(song_id: int, service: SongService = Depends(get_song_service)):
    return await service.get_song(song_id)


@router.get("/songs/{song_id}/verses", response_model=List[str], responses=ERRORS, summary="Paginated verses")
async def get_song_verses(
    song_id: int,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    service: SongService = Depends(get_song_service)
):
    return await service.get_verses(song_id, limit=limit, offset=offset)


@router.post("/songs", response_model=SongSaved, responses={**ERRORS, 502: {"model": ErrorResponse}},
             summary="Add or update song")
async def add_or_update_song(payload: SongCreate, service: SongService = Depends(get_song_service)):
    """
    Looks the song up at the search provider and stores the enriched record.
    Posting the same group and song again refreshes the stored fields.
    """
    logger.info(f"Received add request for: {payload.group} - {payload.song}")
    song_id = await service.add_or_update(payload.group, payload.song)
    return SongSaved(id=song_id)


@router.delete("/songs/{song_id}", responses={500: {"model": ErrorResponse}}, summary="Delete song")
async def delete_song(song_id: int, service: SongService = Depends(get_song_service)):
    await service.delete_song(song_id)
    return {"status": "ok"}
