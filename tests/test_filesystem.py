import pytest

from meshkit.bytes import Bytes
from meshkit.filesystem import FileMode, FileStream, FileSystem


@pytest.fixture
def fs():
    filesystem = FileSystem()
    assert filesystem.init() is True
    return filesystem


def test_write_file_returns_count(fs, tmp_path):
    assert fs.write_file(str(tmp_path / "test1"), Bytes("test")) == 4


def test_read_file_after_write(fs, tmp_path):
    path = str(tmp_path / "test1")
    fs.write_file(path, Bytes("test"))
    data = fs.read_file(path)
    assert len(data) == 4
    assert data.to_string() == "test"


def test_overwrite_file(fs, tmp_path):
    path = str(tmp_path / "test1")
    fs.write_file(path, Bytes("a much longer first content"))
    assert fs.write_file(path, Bytes("test")) == 4
    assert fs.read_file(path).to_string() == "test"


def test_remove_file(fs, tmp_path):
    path = str(tmp_path / "test1")
    fs.write_file(path, Bytes("test"))
    assert fs.remove_file(path) is True
    assert fs.file_exists(path) is False
    assert fs.remove_file(path) is False


def test_read_nonexistent_file_is_empty(fs, tmp_path):
    data = fs.read_file(str(tmp_path / "foo"))
    assert len(data) == 0
    assert not data


def test_write_to_missing_directory_fails(fs, tmp_path):
    assert fs.write_file(str(tmp_path / "missing" / "file"), Bytes("test")) == 0


def test_file_exists(fs, tmp_path):
    path = str(tmp_path / "stream")
    assert fs.file_exists(path) is False
    fs.write_file(path, "Hello world!\n")
    assert fs.file_exists(path) is True


def test_write_file_stream(fs, tmp_path):
    path = str(tmp_path / "stream1")
    stream = fs.open_file(path, FileMode.WRITE)
    assert isinstance(stream, FileStream)
    with stream:
        assert stream.write(Bytes("stream")) == 6
        assert stream.available() == 6
    assert stream.closed is True
    assert fs.read_file(path).to_string() == "stream"


def test_read_file_stream(fs, tmp_path):
    path = str(tmp_path / "stream1")
    fs.write_file(path, Bytes("stream"))
    with fs.open_file(path, FileMode.READ) as stream:
        size = stream.size()
        assert size == 6
        data = stream.read_bytes(size)
    assert len(data) == 6
    assert data.compare("stream") == 0


def test_stream_read_and_peek(fs, tmp_path):
    path = str(tmp_path / "ab")
    fs.write_file(path, b"AB")
    with fs.open_file(path, FileMode.READ) as stream:
        assert stream.peek() == ord("A")
        assert stream.read() == ord("A")
        assert stream.available() == 1
        assert stream.read() == ord("B")
        assert stream.read() == -1
        assert stream.peek() == -1


def test_stream_single_byte_write_and_append(fs, tmp_path):
    path = str(tmp_path / "append")
    fs.write_file(path, b"Hi")
    with fs.open_file(path, FileMode.APPEND) as stream:
        assert stream.available() == 2
        assert stream.write(0x21) == 1
        assert stream.available() == 3
        stream.flush()
        assert stream.size() == 3
    assert bytes(fs.read_file(path)) == b"Hi!"


def test_stream_rejects_bad_byte_value(fs, tmp_path):
    with fs.open_file(str(tmp_path / "x"), FileMode.WRITE) as stream:
        with pytest.raises(ValueError):
            stream.write(256)


def test_stream_name(fs, tmp_path):
    path = str(tmp_path / "named")
    with fs.open_file(path, FileMode.WRITE) as stream:
        assert stream.name() == path


def test_open_missing_file_for_read(fs, tmp_path):
    assert fs.open_file(str(tmp_path / "none"), FileMode.READ) is None


def test_open_with_unsupported_mode(fs, tmp_path):
    with pytest.raises(ValueError):
        fs.open_file(str(tmp_path / "x"), "r")


def test_rename_file(fs, tmp_path):
    src = str(tmp_path / "from")
    dst = str(tmp_path / "to")
    fs.write_file(src, b"data")
    assert fs.rename_file(src, dst) is True
    assert fs.file_exists(src) is False
    assert bytes(fs.read_file(dst)) == b"data"
    assert fs.rename_file(src, dst) is False


def test_directories(fs, tmp_path):
    cache = str(tmp_path / "cache")
    assert fs.directory_exists(cache) is False
    assert fs.create_directory(cache) is True
    assert fs.directory_exists(cache) is True
    assert fs.create_directory(cache) is True
    assert fs.remove_directory(cache) is True
    assert fs.directory_exists(cache) is False
    assert fs.remove_directory(cache) is False


def test_cache_writes(fs, tmp_path):
    cache = tmp_path / "cache"
    fs.create_directory(str(cache))
    names = [
        "test",
        "45c50662af11f1b26889efaab547942b45c50662af11f1b26889efaab547942b",
        "40fe4ab8105b591cca1ef159d476a7b440fe4ab8105b591cca1ef159d476a7b4",
    ]
    for name in names:
        assert fs.write_file(str(cache / name), Bytes("test")) == 4
    assert fs.list_directory(str(cache)) == sorted(names)


def test_list_directory_skips_directories(fs, tmp_path):
    fs.write_file(str(tmp_path / "b"), b"1")
    fs.write_file(str(tmp_path / "a"), b"2")
    fs.create_directory(str(tmp_path / "sub"))
    assert fs.list_directory(str(tmp_path)) == ["a", "b"]
    assert fs.list_directory(str(tmp_path / "missing")) == []


def test_list_dir_describes_entries(tmp_path):
    (tmp_path / "file").write_bytes(b"x")
    (tmp_path / "sub").mkdir()
    assert FileSystem.list_dir(str(tmp_path)) == ["FILE: file", "DIR: sub"]
    assert FileSystem.list_dir(str(tmp_path / "missing")) == []


def test_storage_sizes(fs):
    size = fs.storage_size()
    assert size > 0
    assert 0 <= fs.storage_available() <= size