import pytest

from app.core.config import settings
from app.core.exceptions import ValidationError, FileTooLargeError
from app.service.IO.upload_service import sniff_content_type, validate_upload, client_filename
from tests.helpers import encode_image


def test_sniff_content_type():
    assert sniff_content_type(encode_image(4, 4, ".png")) == "image/png"
    assert sniff_content_type(encode_image(4, 4, ".jpg")) == "image/jpeg"
    assert sniff_content_type(b"GIF89a....") == "image/gif"
    assert sniff_content_type(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"
    assert sniff_content_type(b"hello world") is None

def test_validate_accepts_png_and_jpeg():
    assert validate_upload(encode_image(4, 4, ".png"), "a.png", "image/png") == "image/png"
    assert validate_upload(encode_image(4, 4, ".jpg"), "a.jpg", "image/jpeg") == "image/jpeg"

def test_validate_trusts_bytes_over_generic_type():
    assert validate_upload(encode_image(4, 4, ".png"), "a.bin", "application/octet-stream") == "image/png"
    assert validate_upload(encode_image(4, 4, ".png"), "a.png", None) == "image/png"

@pytest.mark.parametrize("data, filename, content_type", [
    (b"", "empty.png", "image/png"),
    (b"plain text", "notes.txt", "text/plain"),
    (b"plain text", "fake.png", "image/png"),
    (b"GIF89a" + b"\x00" * 16, "anim.gif", "image/gif"),
    (b"\x89PNG\r\n\x1a\n", "", "image/png"),
])
def test_validate_rejects(data, filename, content_type):
    with pytest.raises(ValidationError):
        validate_upload(data, filename, content_type)

def test_validate_size_limit(monkeypatch):
    monkeypatch.setattr(settings, "MAX_FILE_SIZE", 16)
    with pytest.raises(FileTooLargeError):
        validate_upload(encode_image(20, 20), "big.png", "image/png")

@pytest.mark.parametrize("filename, expected", [
    ("cat.png", "cat.png"),
    ("/home/me/cat.png", "cat.png"),
    ("C:\\Users\\me\\Pictures\\cat.png", "cat.png"),
    ("..\\..\\cat.png", "cat.png"),
    ("  cat.png ", "cat.png"),
])
def test_client_filename_strips_paths(filename, expected):
    assert client_filename(filename) == expected

@pytest.mark.parametrize("filename", [None, "", "   ", "/", "C:\\Users\\", "dir/"])
def test_client_filename_rejects_empty_names(filename):
    with pytest.raises(ValidationError):
        client_filename(filename)

def test_validate_rejects_path_without_name():
    with pytest.raises(ValidationError):
        validate_upload(encode_image(4, 4, ".png"), "/", "image/png")
