import io

import pytest
from PIL import Image

from src.school_admin.school_admin.core.exceptions import ValidationError
from src.school_admin.school_admin.storage.photo_store import PhotoUpload, SupabasePhotoStore, validate_photo


def _image_bytes(fmt="PNG"):
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buf, format=fmt)
    return buf.getvalue()


def test_valid_png_and_jpeg_are_accepted():
    assert validate_photo(PhotoUpload("a.png", "image/png", _image_bytes("PNG"))) == "png"
    assert validate_photo(PhotoUpload("a.jpg", "image/jpeg", _image_bytes("JPEG"))) == "jpg"


def test_wrong_content_type_is_rejected():
    with pytest.raises(ValidationError):
        validate_photo(PhotoUpload("a.gif", "image/gif", _image_bytes("GIF")))


def test_oversized_file_is_rejected():
    with pytest.raises(ValidationError, match="2MB"):
        validate_photo(PhotoUpload("a.png", "image/png", b"\x89PNG" + b"0" * (2 * 1024 * 1024)))


def test_bytes_that_are_not_an_image_are_rejected():
    with pytest.raises(ValidationError):
        validate_photo(PhotoUpload("a.png", "image/png", b"definitely not a png"))


def test_store_uploads_under_folder_and_returns_public_url(fake_db):
    store = SupabasePhotoStore(fake_db, bucket="photos")

    url = store.save(PhotoUpload("a.png", "image/png", _image_bytes()), folder="students")

    [path] = fake_db.files
    assert path.startswith("photos/students/") and path.endswith(".png")
    assert url == f"https://storage.test/{path}"


def test_invalid_photo_never_reaches_storage(fake_db):
    store = SupabasePhotoStore(fake_db)

    with pytest.raises(ValidationError):
        store.save(PhotoUpload("a.png", "image/png", b"nope"), folder="teachers")

    assert fake_db.files == {}
    assert fake_db.connects == 0
