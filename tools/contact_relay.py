#!/usr/bin/env python3
from __future__ import annotations

import argparse
import functools
import html
import http.server
import subprocess
import sys
import urllib.parse
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Callable, Mapping

RECIPIENT = "studio@interactivenature.example"
SUBJECT = "Website Form New Submission"
SENDMAIL = "/usr/sbin/sendmail"
SENDMAIL_TIMEOUT = 30
HOST = "localhost"
PORT = 8788
PREFIX = "[INS]"

# Same characters and entities as PHP trim() and htmlspecialchars()
TRIM_CHARS = " \t\n\r\0\x0b"

REQUIRED_FIELDS = ("name", "email", "category", "priority", "message")

MSG_INVALID_METHOD = "Invalid request method."
MSG_MISSING_FIELDS = "All fields are required."
MSG_SUCCESS = "Thank you for your message!"
MSG_FAILURE = "Failed to send email. Error: "


class MailError(RuntimeError):
    """The host mail facility refused or failed to deliver a message."""


Mailer = Callable[[str, str, str], None]


def _clean(value: str | None) -> str:
    escaped = html.escape((value or "").strip(TRIM_CHARS), quote=True)
    return escaped.replace("&#x27;", "&#039;")


def _flag(form: Mapping[str, str], key: str) -> str:
    return "Yes" if key in form else "No"


@dataclass(frozen=True)
class Submission:
    name: str
    email: str
    category: str
    priority: str
    copy: str
    human: str
    message: str

    @classmethod
    def from_form(cls, form: Mapping[str, str]) -> "Submission":
        return cls(
            name=_clean(form.get("demo-name")),
            email=_clean(form.get("demo-email")),
            category=_clean(form.get("demo-category")),
            priority=_clean(form.get("demo-priority")),
            copy=_flag(form, "demo-copy"),
            human=_flag(form, "demo-human"),
            message=_clean(form.get("demo-message")),
        )

    def missing_fields(self) -> list[str]:
        return [field for field in REQUIRED_FIELDS if not getattr(self, field)]

    def body(self) -> str:
        return (
            f"Name: {self.name}\n"
            f"Email: {self.email}\n"
            f"Category: {self.category}\n"
            f"Priority: {self.priority}\n"
            f"Copy: {self.copy}\n"
            f"Human: {self.human}\n"
            f"Message:\n{self.message}"
        )


def send_mail(to: str, subject: str, body: str, sendmail: str = SENDMAIL) -> None:
    """Hand a plain-text message to the local sendmail binary.

    Raises MailError carrying the facility's last diagnostic when the binary
    is missing or exits non-zero.
    """
    message = EmailMessage()
    message["To"] = to
    message["Subject"] = subject
    message.set_content(body)
    try:
        result = subprocess.run(
            [sendmail, "-t", "-i"],
            input=message.as_bytes(),
            capture_output=True,
            timeout=SENDMAIL_TIMEOUT,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise MailError(str(exc)) from exc
    if result.returncode != 0:
        diagnostic = result.stderr.decode("utf-8", errors="replace").strip()
        raise MailError(diagnostic or f"{sendmail} exited with status {result.returncode}")


def relay(
    method: str,
    form: Mapping[str, str],
    mailer: Mailer = send_mail,
    recipient: str = RECIPIENT,
) -> str:
    if method != "POST":
        return MSG_INVALID_METHOD

    submission = Submission.from_form(form)
    if submission.missing_fields():
        return MSG_MISSING_FIELDS

    try:
        mailer(recipient, SUBJECT, submission.body())
    except MailError as exc:
        print(f"{PREFIX} Contact relay delivery failed: {exc}", file=sys.stderr)
        return f"{MSG_FAILURE}{exc}"
    return MSG_SUCCESS


def _content_length(handler: http.server.BaseHTTPRequestHandler) -> int:
    """Declared body size; malformed or negative values count as no body."""
    try:
        length = int(handler.headers.get("Content-Length") or 0)
    except ValueError:
        return 0
    return max(length, 0)


def _read_form(handler: http.server.BaseHTTPRequestHandler) -> dict[str, str]:
    length = _content_length(handler)
    raw = handler.rfile.read(length).decode("utf-8", errors="replace") if length else ""
    parsed = urllib.parse.parse_qs(raw, keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items()}


def respond(
    handler: http.server.BaseHTTPRequestHandler,
    mailer: Mailer = send_mail,
    recipient: str = RECIPIENT,
) -> None:
    """Answer one request through the relay as a plain-text 200 response."""
    method = handler.command
    form = _read_form(handler) if method == "POST" else {}
    payload = relay(method, form, mailer=mailer, recipient=recipient).encode("utf-8")
    handler.send_response(200)
    handler.send_header("Content-Type", "text/plain; charset=utf-8")
    handler.send_header("Content-Length", str(len(payload)))
    handler.end_headers()
    if method != "HEAD":
        handler.wfile.write(payload)


class ContactRelayHandler(http.server.BaseHTTPRequestHandler):
    def __init__(self, *args, mailer: Mailer = send_mail, recipient: str = RECIPIENT, **kwargs):
        self.mailer = mailer
        self.recipient = recipient
        super().__init__(*args, **kwargs)

    def _relay(self) -> None:
        respond(self, self.mailer, self.recipient)

    do_GET = _relay
    do_HEAD = _relay
    do_POST = _relay
    do_PUT = _relay
    do_PATCH = _relay
    do_DELETE = _relay


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Serve the contact form relay.")
    parser.add_argument("--host", default=HOST, help="Interface to bind.")
    parser.add_argument("--port", type=int, default=PORT, help="Port to listen on.")
    parser.add_argument("--to", default=RECIPIENT, help="Destination address for submissions.")
    parser.add_argument("--sendmail", default=SENDMAIL, help="Path of the sendmail binary.")
    args = parser.parse_args(argv)

    mailer = functools.partial(send_mail, sendmail=args.sendmail)
    handler = functools.partial(ContactRelayHandler, mailer=mailer, recipient=args.to)
    httpd = http.server.ThreadingHTTPServer((args.host, args.port), handler)
    print(f"{PREFIX} Contact relay listening on http://{args.host}:{args.port}/ (to: {args.to})")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        print(f"{PREFIX} Shutting down contact relay.")
    finally:
        httpd.server_close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
