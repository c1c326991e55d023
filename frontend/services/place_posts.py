"""
Local feed of travel posts ("Share Your Travel Experience").

Posts live only for the session; nothing is sent to the backend.
"""
from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import List, Optional

from domain.errors import InvalidPost, PostNotFound
from domain.models import ImageAttachment, Post, ScreenStatus

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 500
DEFAULT_AUTHOR = "User"


class PostFeed:
    def __init__(self) -> None:
        self.posts: List[Post] = []
        self.status = ScreenStatus.IDLE
        self._last_id = 0

    def _next_id(self) -> int:
        # Millisecond timestamp, bumped when two posts land in the same ms.
        candidate = int(time.time() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def create_post(
        self,
        title: str,
        location: str,
        description: str,
        image: Optional[ImageAttachment] = None,
        author: str = DEFAULT_AUTHOR,
    ) -> Post:
        """Validate and prepend a new post (newest first)."""
        self.status = ScreenStatus.LOADING
        try:
            for field_name, value in (("title", title), ("location", location), ("description", description)):
                if not value or not value.strip():
                    raise InvalidPost(f"{field_name} is required")
            if len(description) > MAX_DESCRIPTION_LENGTH:
                raise InvalidPost(
                    f"description must be at most {MAX_DESCRIPTION_LENGTH} characters"
                )
        except InvalidPost:
            self.status = ScreenStatus.FAILED
            raise

        post = Post(
            id=self._next_id(),
            title=title,
            location=location,
            description=description,
            author=author or DEFAULT_AUTHOR,
            timestamp=datetime.now(),
            image=image,
        )
        self.posts.insert(0, post)
        self.status = ScreenStatus.LOADED
        logger.info("Created post %s (%s)", post.id, post.title)
        return post

    def get(self, post_id: int) -> Post:
        for post in self.posts:
            if post.id == post_id:
                return post
        raise PostNotFound(post_id)

    def like(self, post_id: int) -> Post:
        post = self.get(post_id)
        post.likes += 1
        return post
