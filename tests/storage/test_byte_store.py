"""
Tests for ByteStore.
"""

import pytest

from onnx_gen_lite.storage.byte_store import ByteStore


@pytest.mark.unit
def test_read_missing_file_raises(byte_store):
    """Reading a file that was never written fails."""
    with pytest.raises(FileNotFoundError):
        byte_store.read("model.onnx")


@pytest.mark.unit
def test_append_creates_and_extends(byte_store):
    """Chunks are appended in order."""
    byte_store.append("model.onnx", b"abc")
    byte_store.append("model.onnx", b"def")

    assert byte_store.read("model.onnx") == b"abcdef"
    assert byte_store.length("model.onnx") == 6


@pytest.mark.unit
def test_length_of_missing_file_is_zero(byte_store):
    """Missing files report zero length."""
    assert byte_store.length("model.onnx") == 0


@pytest.mark.unit
def test_clear_removes_file(byte_store):
    """Cleared files read as missing and have zero length."""
    byte_store.append("model.onnx", b"abc")
    byte_store.clear("model.onnx")

    assert byte_store.length("model.onnx") == 0
    with pytest.raises(FileNotFoundError):
        byte_store.read("model.onnx")


@pytest.mark.unit
def test_clear_missing_file_is_noop(byte_store):
    """Clearing a missing file does not raise."""
    byte_store.clear("model.onnx")


@pytest.mark.unit
def test_files_are_independent(byte_store):
    """Different names do not share contents."""
    byte_store.append("a.onnx", b"1")
    byte_store.append("b.onnx", b"22")

    assert byte_store.read("a.onnx") == b"1"
    assert byte_store.length("b.onnx") == 2


@pytest.mark.unit
@pytest.mark.parametrize("name", ["", "../model.onnx", "sub/model.onnx"])
def test_invalid_names_rejected(tmp_path, name):
    """Names must be plain file names inside the store."""
    store = ByteStore(str(tmp_path))
    with pytest.raises(ValueError):
        store.append(name, b"x")
