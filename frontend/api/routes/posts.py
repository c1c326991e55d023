"""
Travel posts feed.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from api.session import GuideSession, get_session
from domain.errors import AttachmentRejected, InvalidPost, PostNotFound
from services.attachments import load_attachment

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[Dict[str, Any]])
def list_posts(session: GuideSession = Depends(get_session)):
    """Posts newest first."""
    with session.lock:
        return [p.to_dict() for p in session.posts.posts]


@router.post("", response_model=Dict[str, Any])
def create_post(
    title: str = Form(...),
    location: str = Form(...),
    description: str = Form(...),
    image: Optional[UploadFile] = File(None),
    session: GuideSession = Depends(get_session),
):
    attachment = None
    if image is not None and image.filename:
        content = image.file.read()
        try:
            attachment = load_attachment(
                content,
                filename=image.filename,
                content_type=image.content_type,
            )
        except AttachmentRejected as exc:
            raise HTTPException(status_code=400, detail=exc.message)

    with session.lock:
        try:
            post = session.posts.create_post(title, location, description, image=attachment)
        except InvalidPost as exc:
            raise HTTPException(status_code=400, detail=exc.message)
        return post.to_dict()


@router.post("/{post_id}/like", response_model=Dict[str, Any])
def like_post(post_id: int, session: GuideSession = Depends(get_session)):
    with session.lock:
        try:
            post = session.posts.like(post_id)
        except PostNotFound as exc:
            raise HTTPException(status_code=404, detail=exc.message)
        return post.to_dict()
