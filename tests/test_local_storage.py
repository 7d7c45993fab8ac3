import pytest

from irecruit_core.adapters.local_storage import LocalFileStorage
from irecruit_core.domain.errors import BadRequestError
from irecruit_core.ports.storage import UploadedFile


def test_upload_returns_relative_paths(tmp_path):
    storage = LocalFileStorage(str(tmp_path))
    out = storage.upload_files([UploadedFile("cvPdf", "cv.pdf", b"%PDF")], "uploads\\candidats\\X1\\applications", ["pdf"])
    path = out["cvPdf"]
    assert path.startswith("uploads/candidats/X1/applications/cvPdf-")
    assert path.endswith(".pdf")
    assert (tmp_path / path).read_bytes() == b"%PDF"


def test_nothing_written_when_one_file_is_invalid(tmp_path):
    storage = LocalFileStorage(str(tmp_path))
    files = [UploadedFile("a", "a.pdf", b"1"), UploadedFile("b", "b.exe", b"2")]
    with pytest.raises(BadRequestError, match="Invalid file format for b"):
        storage.upload_files(files, "uploads/x", ["pdf"])
    assert not (tmp_path / "uploads").exists()


def test_no_files_gives_empty_mapping(tmp_path):
    assert LocalFileStorage(str(tmp_path)).upload_files([], "uploads/x", ["pdf"]) == {}
