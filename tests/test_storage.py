import io

import pytest

from core import storage
from core.errors import StorageError
from core.storage import FileStore, original_extension


@pytest.mark.parametrize(
    "filename, ext",
    [
        ("cat.png", ".png"),
        ("CAT.JPG", ".JPG"),
        ("archive.tar.gz", ".gz"),
        ("noext", ""),
        (".hidden", ""),
        ("", ""),
        (None, ""),
        ("C:\\Users\\me\\pic.webp", ".webp"),
        ("dir/sub/pic.bmp", ".bmp"),
    ],
)
def test_original_extension(filename, ext):
    assert original_extension(filename) == ext


@pytest.fixture
def store(tmp_path):
    s = FileStore(tmp_path / "uploads", "/uploads/")
    s.ensure_root()
    return s


def test_save_uses_timestamp_and_extension(store, monkeypatch):
    monkeypatch.setattr(storage, "now_ms", lambda: 1700000000123)

    name = store.save(io.BytesIO(b"data"), "cat.png")

    assert name == "1700000000123.png"
    assert store.path_for(name).read_bytes() == b"data"
    assert store.url_for(name) == "/uploads/1700000000123.png"


def test_same_millisecond_uploads_get_suffix(store, monkeypatch):
    monkeypatch.setattr(storage, "now_ms", lambda: 42)

    first = store.save(io.BytesIO(b"one"), "a.png")
    second = store.save(io.BytesIO(b"two"), "b.png")
    third = store.save(io.BytesIO(b"three"), "c.jpg")

    assert (first, second, third) == ("42.png", "42-1.png", "42.jpg")
    assert store.path_for(first).read_bytes() == b"one"
    assert store.path_for(second).read_bytes() == b"two"


def test_save_into_missing_directory_raises_storage_error(tmp_path):
    s = FileStore(tmp_path / "missing", "/uploads")

    with pytest.raises(StorageError) as exc_info:
        s.save(io.BytesIO(b"x"), "a.png")

    assert exc_info.value.code == "STORAGE_ERROR"


def test_url_for_escapes_generated_name(store):
    assert store.url_for("42.png#x") == "/uploads/42.png%23x"
    assert store.url_for("42.a%41") == "/uploads/42.a%2541"
    assert store.url_for("42.j pg") == "/uploads/42.j%20pg"
