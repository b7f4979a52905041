import base64

import httpx
import pytest

from swachhsnap.core.exceptions import MediaUploadError
from swachhsnap.services.media_service import (
    CloudinaryMediaStorage,
    LocalMediaStorage,
    MediaService,
    decode_image,
)

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8


def _data_url(data, content_type="image/png"):
    return f"data:{content_type};base64," + base64.b64encode(data).decode()


def test_decode_data_url():
    assert decode_image(_data_url(PNG)) == (PNG, "image/png")


def test_decode_raw_bytes_keeps_content_type():
    assert decode_image(PNG, "image/webp") == (PNG, "image/webp")


@pytest.mark.parametrize("payload, content_type", [
    (b"", "image/png"),
    (PNG, "application/pdf"),
    (PNG, None),
    ("https://example.org/photo.jpg", None),
    ("data:image/png,plain-not-base64", None),
    ("data:image/png;base64,@@@", None),
])
def test_decode_rejects_bad_payloads(payload, content_type):
    with pytest.raises(MediaUploadError):
        decode_image(payload, content_type)


def test_local_storage_writes_file(tmp_path):
    storage = LocalMediaStorage(root=str(tmp_path), base_url="http://localhost:8000/media/")

    url = storage.upload(PNG, "complaints/CMP-ABC123/before", "image/png")

    assert url == "http://localhost:8000/media/complaints/CMP-ABC123/before.png"
    assert (tmp_path / "complaints" / "CMP-ABC123" / "before.png").read_bytes() == PNG


def test_local_storage_rejects_escaping_paths(tmp_path):
    storage = LocalMediaStorage(root=str(tmp_path), base_url="http://localhost:8000/media")
    with pytest.raises(MediaUploadError):
        storage.upload(PNG, "../outside", "image/png")


def _cloudinary(handler, **kwargs):
    options = dict(cloud_name="demo", upload_preset="swachh_unsigned", timeout=5)
    options.update(kwargs)
    return CloudinaryMediaStorage(transport=httpx.MockTransport(handler), **options)


def test_cloudinary_upload_returns_secure_url():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = request.read()
        return httpx.Response(200, json={"secure_url": "https://res.cloudinary.com/demo/image/upload/v1/a.png"})

    url = _cloudinary(handler).upload(PNG, "complaints/CMP-ABC123/after", "image/png")

    assert url == "https://res.cloudinary.com/demo/image/upload/v1/a.png"
    assert seen["url"] == "https://api.cloudinary.com/v1_1/demo/image/upload"
    assert b'name="upload_preset"' in seen["body"]
    assert b"swachh_unsigned" in seen["body"]
    assert b'name="file"' in seen["body"]


def test_cloudinary_reports_provider_message():
    def handler(request):
        return httpx.Response(400, json={"error": {"message": "Upload preset not found"}})

    with pytest.raises(MediaUploadError, match="Upload preset not found"):
        _cloudinary(handler).upload(PNG, "complaints/x/after", "image/png")


def test_cloudinary_error_without_body():
    def handler(request):
        return httpx.Response(503, text="unavailable")

    with pytest.raises(MediaUploadError, match="503"):
        _cloudinary(handler).upload(PNG, "complaints/x/after", "image/png")


def test_cloudinary_missing_secure_url():
    def handler(request):
        return httpx.Response(200, json={"public_id": "abc"})

    with pytest.raises(MediaUploadError, match="No URL"):
        _cloudinary(handler).upload(PNG, "complaints/x/after", "image/png")


@pytest.mark.parametrize("response", [
    httpx.Response(200, text="<html>gateway</html>"),
    httpx.Response(200, json=["https://res.cloudinary.com/demo/a.png"]),
])
def test_cloudinary_unreadable_success_body(response):
    def handler(request):
        return response

    with pytest.raises(MediaUploadError, match="Invalid response"):
        _cloudinary(handler).upload(PNG, "complaints/x/after", "image/png")


def test_cloudinary_error_with_unexpected_shape():
    def handler(request):
        return httpx.Response(400, json={"error": "bad preset"})

    with pytest.raises(MediaUploadError, match="400"):
        _cloudinary(handler).upload(PNG, "complaints/x/after", "image/png")


def test_cloudinary_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(MediaUploadError):
        _cloudinary(handler).upload(PNG, "complaints/x/after", "image/png")


def test_cloudinary_requires_configuration():
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(MediaUploadError, match="not configured"):
        _cloudinary(handler, cloud_name="").upload(PNG, "complaints/x/after", "image/png")


def test_media_service_propagates_backend_failure():
    class BrokenStorage:
        def upload(self, data, path, content_type):
            raise MediaUploadError("disk full")

    with pytest.raises(MediaUploadError, match="disk full"):
        MediaService(BrokenStorage()).upload_image(_data_url(PNG), "complaints/x/before")
