from __future__ import annotations

import requests

from student_portal.legacy.host import LegacyHost


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


class FakeSession:
    def __init__(self, head_status=200, head_error=None):
        self.head_status = head_status
        self.head_error = head_error
        self.heads = []

    def head(self, url, timeout=None, allow_redirects=False):
        self.heads.append((url, timeout, allow_redirects))
        if self.head_error:
            raise self.head_error
        return FakeResponse(self.head_status)

    def close(self):
        pass


def test_urls_are_built_from_base_url():
    host = LegacyHost("https://legacy.test/", session=FakeSession())

    assert host.upload_endpoint == "https://legacy.test/upload.php"
    assert host.schedule_url("horario_dsi.pdf") == "https://legacy.test/uploads/horario_dsi.pdf"
    assert host.image_url("1-2-a.jpg") == "https://legacy.test/imagenesJ/1-2-a.jpg"


def test_qr_url_uses_only_the_file_name():
    host = LegacyHost("https://legacy.test", session=FakeSession())

    assert host.qr_url("/var/www/qr_codes/12345678.png") == "https://legacy.test/qr_codes/12345678.png"
    assert host.qr_url("C:\\qr\\12345678.png") == "https://legacy.test/qr_codes/12345678.png"


def test_exists_true_on_2xx():
    session = FakeSession(head_status=200)
    host = LegacyHost("https://legacy.test", probe_timeout=3.0, session=session)

    assert host.exists("https://legacy.test/uploads/a.pdf")
    assert session.heads == [("https://legacy.test/uploads/a.pdf", 3.0, True)]


def test_exists_false_on_404_or_network_error():
    assert not LegacyHost("https://legacy.test", session=FakeSession(head_status=404)).exists("u")
    assert not LegacyHost(
        "https://legacy.test", session=FakeSession(head_error=requests.ConnectionError("down"))
    ).exists("u")
