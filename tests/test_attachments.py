"""
Tests for image storage: the Attachment Manager, both storage backends,
backend selection and the multipart upload gate.
"""

import io
from unittest.mock import Mock

import pytest
import requests
from starlette.datastructures import Headers, UploadFile

from adapters.image_service import ImageServiceBackend
from adapters.local_storage import LocalStorageBackend, stored_name
from api.uploads import read_image_uploads
from app.config import Settings
from app.exceptions import ServiceValidationError, StorageError
from domain.models import UploadedImage
from services.attachment_service import AttachmentManager, build_backend
from test_fixtures import JPEG_BYTES, FakeStorageBackend


def _upload(name="x.jpg", data=JPEG_BYTES, content_type="image/jpeg"):
    return UploadedImage(filename=name, content_type=content_type, data=data)


@pytest.fixture
def manager():
    backend = FakeStorageBackend()
    mgr = AttachmentManager(backend, max_workers=3)
    yield mgr
    mgr.close()


# =============================================================================
# ATTACHMENT MANAGER
# =============================================================================


def test_store_many_preserves_input_order(manager):
    uploads = [_upload(f"{i}.jpg") for i in range(6)]

    stored = manager.store_many("u1", uploads)

    names = [s.key.split("-", 1)[1] for s in stored]
    assert names == [f"{i}.jpg" for i in range(6)]
    assert all(s.key.startswith("u1/") for s in stored)


def test_store_many_failure_cleans_up_and_raises(manager):
    manager.backend.fail_store_after = 2

    with pytest.raises(StorageError):
        manager.store_many("u1", [_upload(f"{i}.jpg") for i in range(4)])

    assert len(manager.backend.stored) == 2
    assert sorted(manager.backend.deleted) == sorted(s.key for s in manager.backend.stored)
    assert manager.backend.files == {}


def test_store_many_wraps_unexpected_errors():
    backend = Mock()
    backend.store.side_effect = ValueError("boom")
    mgr = AttachmentManager(backend, max_workers=1)

    with pytest.raises(StorageError) as exc:
        mgr.store_many("u1", [_upload()])

    assert isinstance(exc.value.__cause__, ValueError)
    mgr.close()


def test_delete_many_reports_each_key(manager):
    manager.backend.fail_delete = {"b"}

    report = manager.delete_many(["a", "b", "c", "a", ""])

    assert sorted(report.deleted) == ["a", "c"]
    assert list(report.failed) == ["b"]
    assert not report.ok
    assert sorted(manager.backend.deleted) == ["a", "b", "c"]


def test_delete_many_never_raises_on_unexpected_errors():
    backend = Mock()
    backend.delete.side_effect = RuntimeError("network down")
    mgr = AttachmentManager(backend, max_workers=2)

    report = mgr.delete_many(["x"])

    assert report.failed == {"x": "network down"}
    mgr.close()


def test_discard_inline_and_deferred(manager):
    manager.discard(["a"])
    assert manager.backend.deleted == ["a"]

    tasks = Mock()
    manager.discard(["b", "c"], tasks)
    tasks.add_task.assert_called_once_with(manager.delete_many, ["b", "c"])
    assert manager.backend.deleted == ["a"]

    manager.discard([], tasks)
    assert tasks.add_task.call_count == 1


# =============================================================================
# LOCAL BACKEND
# =============================================================================


def test_local_backend_store_and_delete(tmp_path):
    backend = LocalStorageBackend(str(tmp_path), url_prefix="/uploads")

    image = backend.store("owner1", JPEG_BYTES, "Lunch.JPG", "image/jpeg")

    assert image.key.startswith("meals/owner1/")
    assert image.key.endswith(".jpg")
    assert image.url == f"/uploads/{image.key}"
    assert (tmp_path / image.key).read_bytes() == JPEG_BYTES

    backend.delete(image.key)
    assert not (tmp_path / image.key).exists()


def test_local_backend_names_never_collide(tmp_path):
    backend = LocalStorageBackend(str(tmp_path))

    keys = {backend.store("o", b"x", "same.png", "image/png").key for _ in range(20)}

    assert len(keys) == 20


def test_local_backend_absolute_url_prefix(tmp_path):
    backend = LocalStorageBackend(str(tmp_path), url_prefix="https://api.example.test/uploads/")

    image = backend.store("o", b"x", "a.png", "image/png")

    assert image.url == f"https://api.example.test/uploads/{image.key}"


@pytest.mark.parametrize("key", ["../outside.jpg", "meals/../../etc/passwd", "/etc/passwd"])
def test_local_backend_rejects_keys_outside_root(tmp_path, key):
    backend = LocalStorageBackend(str(tmp_path / "root"))

    with pytest.raises(StorageError):
        backend.delete(key)


def test_local_backend_delete_missing_file_raises(tmp_path):
    backend = LocalStorageBackend(str(tmp_path))

    with pytest.raises(StorageError):
        backend.delete("meals/o/missing.jpg")


def test_stored_name_extension():
    assert stored_name("photo.PNG").endswith(".png")
    assert stored_name("no-extension", "image/png").endswith(".png")
    assert stored_name("weird.exe", "").endswith(".bin")


# =============================================================================
# REMOTE BACKEND
# =============================================================================


def _remote(session):
    return ImageServiceBackend(
        "private_key",
        upload_url="https://upload.example.test/files/upload",
        api_url="https://api.example.test/v1/",
        folder="gutcheck",
        timeout=5,
        session=session,
    )


def test_remote_backend_store_posts_to_owner_folder():
    session = Mock()
    session.post.return_value = Mock(
        ok=True, status_code=200, json=Mock(return_value={"fileId": "f1", "url": "https://cdn/f1.jpg"})
    )
    backend = _remote(session)

    image = backend.store("owner1", JPEG_BYTES, "a.jpg", "image/jpeg")

    assert image.key == "f1"
    assert image.url == "https://cdn/f1.jpg"
    assert session.auth == ("private_key", "")
    args, kwargs = session.post.call_args
    assert args == ("https://upload.example.test/files/upload",)
    assert kwargs["data"]["folder"] == "/gutcheck/owner1"
    assert kwargs["files"]["file"][1] == JPEG_BYTES
    assert kwargs["timeout"] == 5


@pytest.mark.parametrize(
    "response",
    [
        Mock(ok=False, status_code=500, text="oops"),
        Mock(ok=True, status_code=200, json=Mock(side_effect=ValueError("not json"))),
        Mock(ok=True, status_code=200, json=Mock(return_value={"url": "https://cdn/x"})),
    ],
)
def test_remote_backend_store_failures_raise_storage_error(response):
    session = Mock()
    session.post.return_value = response

    with pytest.raises(StorageError):
        _remote(session).store("o", b"x", "a.jpg", "image/jpeg")


def test_remote_backend_network_error_raises_storage_error():
    session = Mock()
    session.post.side_effect = requests.ConnectionError("unreachable")

    with pytest.raises(StorageError):
        _remote(session).store("o", b"x", "a.jpg", "image/jpeg")


def test_remote_backend_delete():
    session = Mock()
    session.delete.return_value = Mock(ok=True, status_code=204)

    _remote(session).delete("f1")

    session.delete.assert_called_once_with("https://api.example.test/v1/files/f1", timeout=5)


def test_remote_backend_delete_failure_raises():
    session = Mock()
    session.delete.return_value = Mock(ok=False, status_code=404)

    with pytest.raises(StorageError):
        _remote(session).delete("f1")


def test_remote_backend_requires_private_key():
    with pytest.raises(StorageError):
        ImageServiceBackend("", upload_url="u", api_url="a", session=Mock())


# =============================================================================
# BACKEND SELECTION
# =============================================================================


def test_build_backend_local(tmp_path):
    config = Settings(storage_backend="local", uploads_dir=str(tmp_path), public_base_url="")

    backend = build_backend(config)

    assert isinstance(backend, LocalStorageBackend)
    assert backend.url_prefix == "/uploads"


def test_build_backend_remote():
    config = Settings(storage_backend="IMAGEKIT", image_service_private_key="k")

    assert isinstance(build_backend(config), ImageServiceBackend)


def test_remote_backend_without_key_fails_runtime_check():
    config = Settings(storage_backend="imagekit", image_service_private_key=None)

    with pytest.raises(RuntimeError):
        config.check_runtime()


# =============================================================================
# UPLOAD GATE
# =============================================================================


def _file(name, data=JPEG_BYTES, content_type="image/jpeg"):
    return UploadFile(
        file=io.BytesIO(data), filename=name, headers=Headers({"content-type": content_type})
    )


def test_read_image_uploads_accepts_images():
    config = Settings()

    uploads = read_image_uploads([_file("a.jpg"), _file("b.png", content_type="image/png")], config)

    assert [u.filename for u in uploads] == ["a.jpg", "b.png"]
    assert uploads[1].content_type == "image/png"
    assert uploads[0].data == JPEG_BYTES


def test_read_image_uploads_skips_empty_parts():
    assert read_image_uploads(None, Settings()) == []
    assert read_image_uploads([_file("")], Settings()) == []


def test_read_image_uploads_rejects_too_large_file():
    config = Settings(upload_max_file_size_mb=1)
    big = b"\x00" * (1024 * 1024 + 1)

    with pytest.raises(ServiceValidationError) as exc:
        read_image_uploads([_file("big.jpg", data=big)], config)

    assert exc.value.message == "File too large (max 1MB)"


def test_read_image_uploads_file_at_limit_is_accepted():
    config = Settings(upload_max_file_size_mb=1)

    uploads = read_image_uploads([_file("ok.jpg", data=b"\x00" * (1024 * 1024))], config)

    assert uploads[0].size == 1024 * 1024


def test_read_image_uploads_limits_count():
    config = Settings(upload_max_files=2)

    with pytest.raises(ServiceValidationError) as exc:
        read_image_uploads([_file(f"{i}.jpg") for i in range(3)], config)

    assert exc.value.message == "Too many files (max 2)"
