"""
Character flow API routes.

Thin HTTP wrapper over CharacterFlowController: one route per flow event.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, UploadFile, status
from pydantic import BaseModel

from api_gateway.dependencies import get_controller, get_registry
from api_gateway.services.session_registry import SessionRegistry, session_view
from modules.character_flow.controller import CharacterFlowController
from shared.logging import get_logger
from shared.models.character import RenderStyle, SourcePhoto
from shared.validation import validate_photo_size

logger = get_logger(__name__)

router = APIRouter()


class NameRequest(BaseModel):
    name: str


class AgeRequest(BaseModel):
    age: int


class MeasuresRequest(BaseModel):
    height: int
    weight: int


class RenderRequest(BaseModel):
    style: Optional[RenderStyle] = None


class GalleryRequest(BaseModel):
    include_photo: bool = True


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
async def create_session(
    background_tasks: BackgroundTasks,
    sessions: SessionRegistry = Depends(get_registry),
):
    """
    Create a session in intake. It moves to identify after the intake delay.
    """
    controller = sessions.create()
    background_tasks.add_task(controller.start)
    return session_view(controller)


@router.get("/sessions/{session_id}")
async def get_session(controller: CharacterFlowController = Depends(get_controller)):
    return session_view(controller)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: UUID,
    sessions: SessionRegistry = Depends(get_registry),
):
    """
    Discard a session (the user navigated away). Its cost ledger is released.
    """
    total = await sessions.remove(session_id)
    if total is None:
        raise HTTPException(status_code=404, detail="Session not found")


@router.post("/sessions/{session_id}/photo")
async def submit_photo(
    photo: UploadFile = File(...),
    controller: CharacterFlowController = Depends(get_controller),
):
    """
    Upload the source photo and run attribute estimation.

    Returns the session in attribute_review_age (or failed).
    """
    if photo.size is not None:
        validate_photo_size(photo.size, controller.settings.max_photo_size_mb)
    data = await photo.read()
    source = SourcePhoto(
        filename=photo.filename or "",
        content_type=photo.content_type,
        data=data,
    )
    logger.info(
        "Photo received",
        extra={"photo_filename": source.filename, "size_bytes": source.size_bytes}
    )
    await controller.submit_photo(source)
    return session_view(controller)


@router.put("/sessions/{session_id}/name")
async def set_name(body: NameRequest, controller: CharacterFlowController = Depends(get_controller)):
    controller.set_name(body.name)
    return session_view(controller)


@router.put("/sessions/{session_id}/age")
async def confirm_age(body: AgeRequest, controller: CharacterFlowController = Depends(get_controller)):
    controller.confirm_age(body.age)
    return session_view(controller)


@router.put("/sessions/{session_id}/measures")
async def confirm_measures(body: MeasuresRequest, controller: CharacterFlowController = Depends(get_controller)):
    controller.confirm_measures(body.height, body.weight)
    return session_view(controller)


@router.post("/sessions/{session_id}/render")
async def request_render(
    body: Optional[RenderRequest] = None,
    controller: CharacterFlowController = Depends(get_controller),
):
    """
    Render the cartoon. Returns the session in complete or failed.
    """
    await controller.request_render(body.style if body else None)
    return session_view(controller)


@router.post("/sessions/{session_id}/acknowledge")
async def acknowledge_failure(controller: CharacterFlowController = Depends(get_controller)):
    controller.acknowledge_failure()
    return session_view(controller)


@router.post("/sessions/{session_id}/restart")
async def restart_session(
    background_tasks: BackgroundTasks,
    controller: CharacterFlowController = Depends(get_controller),
    sessions: SessionRegistry = Depends(get_registry),
):
    """
    Discard the session and start a new one. The old id stops resolving.
    """
    sessions.restart(controller.session.session_id)
    background_tasks.add_task(controller.start)
    return session_view(controller)


@router.post("/sessions/{session_id}/gallery", status_code=status.HTTP_201_CREATED)
async def save_to_gallery(
    body: Optional[GalleryRequest] = None,
    controller: CharacterFlowController = Depends(get_controller),
):
    include_photo = body.include_photo if body else True
    gallery_id = await controller.save_to_gallery(include_photo=include_photo)
    return {"gallery_id": gallery_id, "session": session_view(controller)}


@router.get("/gallery")
async def list_gallery(sessions: SessionRegistry = Depends(get_registry)):
    """Saved characters, oldest first. Source photos are omitted."""
    records = await sessions.gallery.list_records()
    return [
        {"gallery_id": gallery_id, **record.model_dump(mode="json", exclude={"source_photo"})}
        for gallery_id, record in records
    ]


@router.get("/gallery/{gallery_id}")
async def get_gallery_record(gallery_id: str, sessions: SessionRegistry = Depends(get_registry)):
    record = await sessions.gallery.get(gallery_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Gallery record not found")
    return {"gallery_id": gallery_id, **record.model_dump(mode="json")}
