"""Routes for the current user's notes."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..core.auth import get_current_user
from ..core.database import User
from ..core.dependencies import get_service
from ..core.services import NoteAutosaver, NoteService, get_note_autosaver
from ..core.suggestions import NoteInsights
from ..schemas.note import DraftAccepted, Note, NoteHtml, NoteUpdate
from .errors import http_errors

router = APIRouter()


@router.get("", response_model=List[Note])
async def list_notes(
    q: Optional[str] = Query(None, description="Search title and text"),
    current_user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_service(NoteService)),
):
    with http_errors("list notes"):
        return await note_service.list_notes(current_user.id, q)


@router.post("", response_model=Note, status_code=status.HTTP_201_CREATED)
async def create_note(
    current_user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_service(NoteService)),
):
    with http_errors("create note"):
        return await note_service.create_note(current_user.id)


@router.get("/{note_id}", response_model=Note)
async def get_note(
    note_id: str,
    current_user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_service(NoteService)),
):
    with http_errors("get note"):
        return await note_service.get_note(current_user.id, note_id)


@router.patch("/{note_id}", response_model=Note)
async def update_note(
    note_id: str,
    request: NoteUpdate,
    current_user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_service(NoteService)),
    autosaver: NoteAutosaver = Depends(get_note_autosaver),
):
    """Save an edit immediately. Editors typing continuously should use ``/draft``.

    A pending draft of the note is folded in underneath the edit, so the
    older draft never lands after it.
    """
    with http_errors("update note"):
        fields = autosaver.take(current_user.id, note_id)
        fields.update(request.model_dump(exclude_unset=True))
        return await note_service.update_note(current_user.id, note_id, fields)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: str,
    current_user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_service(NoteService)),
    autosaver: NoteAutosaver = Depends(get_note_autosaver),
):
    with http_errors("delete note"):
        await note_service.delete_note(current_user.id, note_id)
        autosaver.cancel(current_user.id, note_id)


@router.post("/{note_id}/favorite", response_model=Note)
async def toggle_favorite(
    note_id: str,
    current_user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_service(NoteService)),
    autosaver: NoteAutosaver = Depends(get_note_autosaver),
):
    with http_errors("toggle favorite"):
        draft = autosaver.take(current_user.id, note_id)
        if draft:
            await note_service.update_note(current_user.id, note_id, draft)
        return await note_service.toggle_favorite(current_user.id, note_id)


@router.get("/{note_id}/html", response_model=NoteHtml)
async def get_note_html(
    note_id: str,
    current_user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_service(NoteService)),
):
    with http_errors("render note"):
        html = await note_service.render_html(current_user.id, note_id)
        return NoteHtml(id=note_id, html=html)


@router.post("/{note_id}/assist", response_model=NoteInsights)
async def assist_note(
    note_id: str,
    current_user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_service(NoteService)),
):
    """Generate suggestions, tags and a summary for the note."""
    with http_errors("analyze note"):
        return await note_service.assist(current_user.id, note_id)


@router.patch(
    "/{note_id}/draft",
    response_model=DraftAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
async def save_draft(
    note_id: str,
    request: NoteUpdate,
    current_user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_service(NoteService)),
    autosaver: NoteAutosaver = Depends(get_note_autosaver),
):
    """Queue an edit; it is written once edits to this note pause."""
    with http_errors("save draft"):
        await note_service.require_note(current_user.id, note_id)
        pending = autosaver.schedule(
            current_user.id, note_id, request.model_dump(exclude_unset=True)
        )
        return DraftAccepted(note_id=note_id, pending=pending, delay=autosaver.delay)


@router.post("/{note_id}/draft/flush")
async def flush_draft(
    note_id: str,
    current_user: User = Depends(get_current_user),
    autosaver: NoteAutosaver = Depends(get_note_autosaver),
):
    """Write the pending draft now instead of waiting for the delay."""
    with http_errors("flush draft"):
        flushed = await autosaver.flush(current_user.id, note_id)
        return {"note_id": note_id, "flushed": flushed}
