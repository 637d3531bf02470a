#!/usr/bin/env python3
from __future__ import annotations

import argparse
import functools
import http.server
import subprocess
import sys
import urllib.parse
from pathlib import Path

import contact_relay
import generate_project_pages

BASE_DIR = Path(__file__).resolve().parents[1]
SITE_DIR = BASE_DIR
GENERATOR = Path(generate_project_pages.__file__).resolve()
CONTACT_ENDPOINT = "/assets/php/contact.php"
PORT = 8787
PREFIX = "[INS]"


def run_build(images_dir: Path | None = None, output_dir: Path | None = None) -> None:
    command = [sys.executable, str(GENERATOR)]
    if images_dir is not None:
        command += ["--images-dir", str(images_dir)]
    if output_dir is not None:
        command += ["--output-dir", str(output_dir)]
    subprocess.run(command, check=True)


class SiteHandler(http.server.SimpleHTTPRequestHandler):
    """Static files from the site root, with the contact relay on its endpoint."""

    def __init__(
        self,
        *args,
        mailer: contact_relay.Mailer = contact_relay.send_mail,
        recipient: str = contact_relay.RECIPIENT,
        **kwargs,
    ):
        self.mailer = mailer
        self.recipient = recipient
        super().__init__(*args, **kwargs)

    def _is_contact_request(self) -> bool:
        return urllib.parse.urlsplit(self.path).path == CONTACT_ENDPOINT

    def do_GET(self) -> None:
        if self._is_contact_request():
            contact_relay.respond(self, self.mailer, self.recipient)
            return
        super().do_GET()

    def do_HEAD(self) -> None:
        if self._is_contact_request():
            contact_relay.respond(self, self.mailer, self.recipient)
            return
        super().do_HEAD()

    def _relay_or_404(self) -> None:
        if self._is_contact_request():
            contact_relay.respond(self, self.mailer, self.recipient)
            return
        self.send_error(404, "Not Found")

    do_POST = _relay_or_404
    do_PUT = _relay_or_404
    do_PATCH = _relay_or_404
    do_DELETE = _relay_or_404


def make_server(
    host: str = "localhost",
    port: int = PORT,
    site_dir: Path = SITE_DIR,
    mailer: contact_relay.Mailer = contact_relay.send_mail,
    recipient: str = contact_relay.RECIPIENT,
) -> http.server.ThreadingHTTPServer:
    handler = functools.partial(SiteHandler, directory=str(site_dir), mailer=mailer, recipient=recipient)
    return http.server.ThreadingHTTPServer((host, port), handler)


def serve(port: int = PORT, recipient: str = contact_relay.RECIPIENT) -> None:
    httpd = make_server(port=port, recipient=recipient)
    url = f"http://localhost:{port}/"
    print(f"{PREFIX} Serving {url} (site dir: {SITE_DIR}, contact relay: {CONTACT_ENDPOINT})")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        print(f"{PREFIX} Shutting down server.")
    finally:
        httpd.server_close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate project pages and serve the site locally.")
    parser.add_argument("--once", action="store_true", help="Build once and exit without serving.")
    parser.add_argument("--port", type=int, default=PORT, help="Port to serve on.")
    parser.add_argument("--to", default=contact_relay.RECIPIENT, help="Destination address for contact submissions.")
    args = parser.parse_args(argv)

    run_build()
    url = f"http://localhost:{args.port}/"
    print(f"{PREFIX} Build complete. Preview at {url}")
    if args.once:
        return 0
    if not generate_project_pages.PROJECTS_DIR.exists():
        print(f"{PREFIX} Project pages directory missing after build.")
        return 1
    serve(args.port, args.to)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
