"""Tests for NamedFileStore."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import pytest

from infra_stages.config import StageConfig
from infra_stages.exceptions import DecodingError, EncodingError, NotFoundError
from infra_stages.state.file_store import NamedFileStore


@dataclass
class TestData:
    __test__ = False

    Foo: str
    Bar: bool
    Baz: Dict[str, Any] = field(default_factory=dict)


class TestPaths:
    """Tests for key to path mapping."""

    def test_path_layout(self, store, working_dir: Path):
        """Test records live in the hidden data directory."""
        path = store.path_for(working_dir, "test-ami")
        assert path == working_dir / ".test-data" / "test-ami.json"

    def test_keys_cannot_escape_directory(self, store, working_dir: Path):
        """Test that separators in keys are quoted."""
        path = store.path_for(working_dir, "../../etc/passwd")
        assert path.parent == working_dir / ".test-data"

    def test_distinct_keys_never_collide(self, store, working_dir: Path):
        """Test that keys differing only in escaped characters map apart."""
        keys = ["a/b", "a%2Fb", "a b", "a+b", "a.b", "A.b"]
        paths = {store.path_for(working_dir, k) for k in keys}
        assert len(paths) == len(keys)

    def test_empty_key_rejected(self, store, working_dir: Path):
        """Test that an empty key is a ValueError."""
        with pytest.raises(ValueError):
            store.path_for(working_dir, "")

    def test_custom_data_dir(self, working_dir: Path, sink):
        """Test that the data directory name comes from config."""
        store = NamedFileStore(config=StageConfig(data_dir_name=".state"), logger=sink)
        assert store.path_for(working_dir, "k").parent == working_dir / ".state"


class TestSaveAndLoad:
    """Tests for save/load/exists/remove."""

    def test_save_and_load_test_data(self, store, working_dir: Path):
        """Test the full save, no-overwrite, load, remove lifecycle."""
        key = "test-data"
        assert store.exists(working_dir, key) is False

        expected = TestData(Foo="foo", Bar=True, Baz={"abc": "def", "ghi": 1.0, "klm": False})
        store.save(working_dir, key, expected, overwrite=True)
        assert store.exists(working_dir, key) is True
        assert store.load(working_dir, key, TestData) == expected

        overwriting = TestData(Foo="foo", Bar=False, Baz={"123": "456", "789": 1.0, "0": False})
        store.save(working_dir, key, overwriting, overwrite=False)
        assert store.load(working_dir, key, TestData) == expected

        store.remove(working_dir, key)
        assert not store.path_for(working_dir, key).exists()
        assert store.exists(working_dir, key) is False
        with pytest.raises(NotFoundError):
            store.load(working_dir, key, TestData)

    def test_overwrite_replaces(self, store, working_dir: Path):
        """Test that overwrite=True replaces the record."""
        store.save(working_dir, "k", {"v": 1})
        store.save(working_dir, "k", {"v": 2}, overwrite=True)
        assert store.load(working_dir, "k") == {"v": 2}

    @pytest.mark.parametrize("empty", [None, False, 0, {}, []])
    def test_overwrite_false_replaces_empty_record(self, store, working_dir: Path, empty):
        """Test that a record holding an empty value does not block a non-overwriting save."""
        store.save(working_dir, "k", empty)
        store.save(working_dir, "k", {"v": 1}, overwrite=False)
        assert store.load(working_dir, "k") == {"v": 1}

    def test_overwrite_false_replaces_zero_length_file(self, store, working_dir: Path):
        """Test that a file with no content does not block a non-overwriting save."""
        path = store.path_for(working_dir, "k")
        path.parent.mkdir(parents=True)
        path.touch()

        store.save(working_dir, "k", "ami-123", overwrite=False)

        assert store.load(working_dir, "k", str) == "ami-123"

    def test_overwrite_false_keeps_non_empty_record(self, store, working_dir: Path, sink):
        """Test that a record holding data blocks a non-overwriting save."""
        store.save(working_dir, "k", "")
        store.save(working_dir, "k", "ami-123", overwrite=False)
        assert store.load(working_dir, "k", str) == ""
        assert "overwrite is disabled" in sink.text

    def test_overwrite_false_writes_when_absent(self, store, working_dir: Path):
        """Test that overwrite=False still saves a missing record."""
        store.save(working_dir, "k", "first", overwrite=False)
        assert store.load(working_dir, "k", str) == "first"

    def test_save_creates_directories(self, store, tmp_path: Path):
        """Test that missing parent directories are created."""
        working_dir = tmp_path / "a" / "b"
        store.save(working_dir, "k", 1)
        assert store.path_for(working_dir, "k").is_file()

    def test_save_leaves_no_temp_files(self, store, working_dir: Path):
        """Test that the atomic write cleans up after itself."""
        store.save(working_dir, "k", {"v": 1})
        store.save(working_dir, "k", {"v": 2})
        names = [p.name for p in store.data_dir(working_dir).iterdir()]
        assert names == ["k.json"]

    @pytest.mark.parametrize("value", [None, False, 0, {}, []])
    def test_exists_false_for_empty_values(self, store, working_dir: Path, value):
        """Test presence check for empty encodings."""
        store.save(working_dir, "k", value)
        assert store.has_record(working_dir, "k") is True
        assert store.exists(working_dir, "k") is False

    @pytest.mark.parametrize("value", [True, 1, {"key": None}, [0]])
    def test_exists_true_for_values(self, store, working_dir: Path, value):
        """Test presence check for non-empty encodings."""
        store.save(working_dir, "k", value)
        assert store.exists(working_dir, "k") is True

    def test_exists_false_for_zero_length_file(self, store, working_dir: Path):
        """Test that a file with no content is not meaningful data."""
        path = store.path_for(working_dir, "k")
        path.parent.mkdir(parents=True)
        path.touch()
        assert store.exists(working_dir, "k") is False

    def test_remove_absent_key(self, store, working_dir: Path):
        """Test that removing a missing key is not an error."""
        store.remove(working_dir, "never-saved")


class TestErrors:
    """Tests for error reporting."""

    def test_not_found_names_key_and_directory(self, store, working_dir: Path):
        """Test NotFoundError carries diagnosable context."""
        with pytest.raises(NotFoundError) as exc_info:
            store.load(working_dir, "awsRegion", str)

        error = exc_info.value
        assert error.key == "awsRegion"
        assert error.working_dir == working_dir
        assert "awsRegion" in str(error)
        assert str(working_dir) in str(error)

    def test_corrupt_record(self, store, working_dir: Path):
        """Test that a truncated record is a DecodingError with context."""
        path = store.path_for(working_dir, "k")
        path.parent.mkdir(parents=True)
        path.write_text('{"Foo": "fo', encoding="utf-8")

        with pytest.raises(DecodingError) as exc_info:
            store.load(working_dir, "k")
        assert exc_info.value.key == "k"
        assert exc_info.value.path == path

    def test_overwrite_false_on_corrupt_record(self, store, working_dir: Path):
        """Test that a malformed record is reported and left in place by a non-overwriting save."""
        path = store.path_for(working_dir, "k")
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(DecodingError) as exc_info:
            store.save(working_dir, "k", "ami-123", overwrite=False)

        assert exc_info.value.key == "k"
        assert path.read_text(encoding="utf-8") == "{not json"

    def test_wrong_shape(self, store, working_dir: Path):
        """Test loading a record with another shape."""
        store.save(working_dir, "k", "ami-123")
        with pytest.raises(DecodingError):
            store.load(working_dir, "k", int)

    def test_encoding_error_writes_nothing(self, store, working_dir: Path):
        """Test that an unencodable value leaves no file behind."""
        with pytest.raises(EncodingError) as exc_info:
            store.save(working_dir, "k", {"fn": print})
        assert exc_info.value.key == "k"
        assert not store.data_dir(working_dir).exists()


class TestListing:
    """Tests for keys() and clear()."""

    def test_keys(self, store, working_dir: Path):
        """Test keys are listed unquoted and sorted."""
        assert store.keys(working_dir) == []
        store.save(working_dir, "b", 1)
        store.save(working_dir, "a/x", 2)
        assert store.keys(working_dir) == ["a/x", "b"]

    @pytest.mark.parametrize("name", ["a b.json", "x%41.json", "%41.json", ".json", "notes.txt"])
    def test_keys_ignore_foreign_files(self, store, working_dir: Path, name):
        """Test that files save() would not have written are not listed."""
        store.save(working_dir, "A", 1)
        (store.data_dir(working_dir) / name).write_text("2", encoding="utf-8")

        assert store.keys(working_dir) == ["A"]

    def test_clear(self, store, working_dir: Path):
        """Test clear removes records and the data directory only."""
        store.save(working_dir, "a", 1)
        store.save(working_dir, "b", 2)
        (working_dir / "main.tf").write_text("", encoding="utf-8")

        store.clear(working_dir)

        assert store.keys(working_dir) == []
        assert not store.data_dir(working_dir).exists()
        assert (working_dir / "main.tf").exists()


class TestLogging:
    """Tests for log output."""

    def test_save_logs_path_not_value(self, store, sink, working_dir: Path):
        """Test that values never reach the log sink."""
        store.save(working_dir, "secret", {"password": "hunter2-s3cr3t"})
        store.load(working_dir, "secret")

        assert "hunter2-s3cr3t" not in sink.text
        assert str(store.path_for(working_dir, "secret")) in sink.text
