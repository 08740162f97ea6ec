import pytest

from nanko.exceptions import NankoIsADirectoryError, NankoOSError, NankoPathValidationError
from nanko.path_validator import PathValidator


def test_validate_existing_file(tmp_path):
    f = tmp_path / "foo.txt"
    f.write_text("hello")
    resolved = PathValidator.get_validated_path(str(f), must_be_file=True)
    assert str(resolved).endswith("foo.txt")


def test_nonexistent_file_is_left_to_open(tmp_path):
    # open() reports the real errno, so validation does not guess one
    f = tmp_path / "nope.txt"
    assert PathValidator.get_validated_path(f) == f


def test_path_through_regular_file_is_left_to_open(tmp_path):
    f = tmp_path / "file.txt"
    f.write_text("x")
    child = f / "child"
    assert PathValidator.get_validated_path(child) == child


def test_directory_rejected(tmp_path):
    with pytest.raises(NankoIsADirectoryError) as excinfo:
        PathValidator.get_validated_path(tmp_path)
    assert excinfo.value.message == "Is a directory"
    assert excinfo.value.error_code == "is-a-directory"
    assert isinstance(excinfo.value, NankoOSError)


def test_directory_allowed_when_not_required(tmp_path):
    assert PathValidator.get_validated_path(tmp_path, must_be_file=False) == tmp_path


def test_control_character_rejected():
    with pytest.raises(NankoPathValidationError):
        PathValidator.get_validated_path("bad\x00name")


def test_empty_path_rejected():
    with pytest.raises(NankoPathValidationError):
        PathValidator.validate_path("")


def test_wrong_type_rejected():
    with pytest.raises(NankoPathValidationError):
        PathValidator.validate_path(42)  # type: ignore[arg-type]
