"""
Tests for tools/dev_server.py
==============================
Serves a throwaway site root on an ephemeral port.

Run with:
    python -m pytest tests/test_dev_server.py -v
"""
from __future__ import annotations

import threading
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path

import pytest

import dev_server
import generate_project_pages
from contact_relay import MSG_INVALID_METHOD, MSG_SUCCESS


class RecordingMailer:
    def __init__(self):
        self.calls: list[tuple[str, str, str]] = []

    def __call__(self, to: str, subject: str, body: str) -> None:
        self.calls.append((to, subject, body))


@pytest.fixture
def site(tmp_path: Path):
    (tmp_path / "index.html").write_text("<h1>Home</h1>", encoding="utf-8")
    mailer = RecordingMailer()
    httpd = dev_server.make_server("127.0.0.1", 0, tmp_path, mailer, "to@example.com")
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{httpd.server_address[1]}", mailer
    finally:
        httpd.shutdown()
        httpd.server_close()


def test_serves_static_files(site):
    base, _ = site
    with urllib.request.urlopen(f"{base}/index.html", timeout=5) as resp:
        assert resp.read().decode("utf-8") == "<h1>Home</h1>"


def test_contact_endpoint_relays_post(site):
    base, mailer = site
    form = {
        "demo-name": "Ada",
        "demo-email": "ada@example.com",
        "demo-category": "Installation",
        "demo-priority": "Low",
        "demo-message": "Hi",
    }
    data = urllib.parse.urlencode(form).encode("utf-8")
    with urllib.request.urlopen(f"{base}{dev_server.CONTACT_ENDPOINT}", data=data, timeout=5) as resp:
        assert resp.read().decode("utf-8") == MSG_SUCCESS
    assert mailer.calls[0][0] == "to@example.com"


def test_contact_endpoint_rejects_get(site):
    base, mailer = site
    with urllib.request.urlopen(f"{base}{dev_server.CONTACT_ENDPOINT}?x=1", timeout=5) as resp:
        assert resp.read().decode("utf-8") == MSG_INVALID_METHOD
    assert mailer.calls == []


def test_post_elsewhere_is_404(site):
    base, _ = site
    with pytest.raises(urllib.error.HTTPError) as exc:
        urllib.request.urlopen(f"{base}/index.html", data=b"a=1", timeout=5)
    assert exc.value.code == 404


def test_run_build_invokes_generator(tmp_path):
    images_dir = tmp_path / "images"
    selected = images_dir / "Light Forest" / "selected"
    selected.mkdir(parents=True)
    (selected / "a.png").write_bytes(b"\x00")
    output_dir = tmp_path / "pages"
    dev_server.run_build(images_dir, output_dir)
    assert (output_dir / "light-forest.html").exists()


@pytest.mark.parametrize("method", ["PUT", "PATCH", "DELETE"])
def test_contact_endpoint_answers_other_methods(site, method):
    base, mailer = site
    request = urllib.request.Request(f"{base}{dev_server.CONTACT_ENDPOINT}", data=b"", method=method)
    with urllib.request.urlopen(request, timeout=5) as resp:
        assert resp.status == 200
        assert resp.read().decode("utf-8") == MSG_INVALID_METHOD
    assert mailer.calls == []


def test_put_elsewhere_is_404(site):
    base, _ = site
    request = urllib.request.Request(f"{base}/index.html", data=b"", method="PUT")
    with pytest.raises(urllib.error.HTTPError) as exc:
        urllib.request.urlopen(request, timeout=5)
    assert exc.value.code == 404


def test_generator_path_follows_module():
    assert dev_server.GENERATOR == Path(generate_project_pages.__file__).resolve()
    assert dev_server.GENERATOR.is_file()


def test_main_once_builds_without_serving(monkeypatch):
    builds = []
    monkeypatch.setattr(dev_server, "run_build", lambda: builds.append(True))
    monkeypatch.setattr(dev_server, "serve", lambda *args: pytest.fail("serve called"))
    assert dev_server.main(["--once"]) == 0
    assert builds == [True]


def test_main_fails_when_pages_dir_missing(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(dev_server, "run_build", lambda: None)
    monkeypatch.setattr(dev_server, "serve", lambda *args: pytest.fail("serve called"))
    monkeypatch.setattr(generate_project_pages, "PROJECTS_DIR", tmp_path / "absent")
    assert dev_server.main([]) == 1
    assert "missing" in capsys.readouterr().out
