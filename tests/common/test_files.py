from __future__ import annotations

import io

import pytest
from werkzeug.datastructures import FileStorage

from student_portal.common.files import UploadedFile, check_file, collect_uploads
from student_portal.core.exceptions import ValidationError

MB = 1024 * 1024


def test_collect_uploads_skips_empty_slots():
    storages = [
        FileStorage(stream=io.BytesIO(b"jpeg"), filename="a.jpg", content_type="image/jpeg"),
        FileStorage(stream=io.BytesIO(b""), filename="", content_type="application/octet-stream"),
        None,
    ]

    files = collect_uploads(storages)

    assert len(files) == 1
    assert files[0].filename == "a.jpg"
    assert files[0].content_type == "image/jpeg"
    assert files[0].data == b"jpeg"


def test_check_file_accepts_images_and_pdf():
    check_file(UploadedFile("a.png", "image/png", b"x"), max_size=MB)
    check_file(UploadedFile("a.pdf", "application/pdf", b"x"), max_size=MB)


def test_check_file_rejects_pdf_when_images_only():
    with pytest.raises(ValidationError):
        check_file(UploadedFile("a.pdf", "application/pdf", b"x"), max_size=MB, allow_pdf=False)


@pytest.mark.parametrize(
    "f",
    [
        UploadedFile("a.txt", "text/plain", b"x"),
        UploadedFile("a.jpg", "image/jpeg", b""),
        UploadedFile("a.jpg", "image/jpeg", b"x" * (MB + 1)),
    ],
)
def test_check_file_rejects_bad_files(f):
    with pytest.raises(ValidationError):
        check_file(f, max_size=MB)
