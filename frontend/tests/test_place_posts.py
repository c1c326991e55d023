"""
Tests for the travel posts feed and image attachments.
"""
import struct
import zlib
from io import BytesIO

import pytest
from PIL import Image

from domain.errors import AttachmentRejected, InvalidPost, PostNotFound
from services.attachments import TOO_LARGE_MESSAGE, load_attachment
from services.place_posts import PostFeed


def _png_bytes(size=(800, 600), color=(30, 120, 200)) -> bytes:
    buf = BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


def _png_with_declared_size(width: int, height: int) -> bytes:
    """A small PNG whose IHDR claims a different size."""
    data = bytearray(_png_bytes(size=(1, 1)))
    # signature (8) + length (4) + b"IHDR" (4), then width and height
    data[16:24] = struct.pack(">II", width, height)
    data[29:33] = struct.pack(">I", zlib.crc32(bytes(data[12:29])) & 0xFFFFFFFF)
    return bytes(data)


class TestPostFeed:
    def test_new_posts_are_prepended(self):
        feed = PostFeed()
        first = feed.create_post("Sunrise", "Sarangkot", "Clouds below us")
        second = feed.create_post("Boating", "Phewa Lake", "Calm water")

        assert [p.id for p in feed.posts] == [second.id, first.id]
        assert second.id > first.id
        assert first.likes == 0
        assert first.comments == []
        assert first.author == "User"

    @pytest.mark.parametrize(
        "title,location,description",
        [("", "Pokhara", "x"), ("T", "  ", "x"), ("T", "Pokhara", "")],
    )
    def test_required_fields(self, title, location, description):
        feed = PostFeed()
        with pytest.raises(InvalidPost):
            feed.create_post(title, location, description)
        assert feed.posts == []

    def test_description_limit(self):
        feed = PostFeed()
        feed.create_post("T", "L", "a" * 500)
        with pytest.raises(InvalidPost):
            feed.create_post("T", "L", "a" * 501)

    def test_like_increments_only_target(self):
        feed = PostFeed()
        a = feed.create_post("A", "L", "d")
        b = feed.create_post("B", "L", "d")

        feed.like(a.id)
        feed.like(a.id)

        assert feed.get(a.id).likes == 2
        assert feed.get(b.id).likes == 0

    def test_like_unknown_post(self):
        with pytest.raises(PostNotFound):
            PostFeed().like(42)


class TestAttachments:
    def test_png_becomes_data_urls(self):
        data = _png_bytes()
        attachment = load_attachment(data, filename="lake.png")

        assert attachment.content_type == "image/png"
        assert attachment.size_bytes == len(data)
        assert (attachment.width, attachment.height) == (800, 600)
        assert attachment.data_url.startswith("data:image/png;base64,")
        assert attachment.preview_data_url.startswith("data:image/jpeg;base64,")

    def test_oversized_image_rejected(self):
        data = _png_bytes()
        with pytest.raises(AttachmentRejected) as excinfo:
            load_attachment(data, max_bytes=len(data) - 1)
        assert excinfo.value.message == TOO_LARGE_MESSAGE

    def test_limit_is_inclusive(self):
        data = _png_bytes()
        assert load_attachment(data, max_bytes=len(data)).size_bytes == len(data)

    def test_non_image_rejected(self):
        with pytest.raises(AttachmentRejected):
            load_attachment(b"definitely not an image", filename="notes.txt")

    def test_huge_declared_dimensions_rejected(self):
        data = _png_with_declared_size(30000, 30000)
        with pytest.raises(AttachmentRejected):
            load_attachment(data, filename="bomb.png")
