"""Email notification channel.

Credentials are proven at construction time: unless validation is disabled,
the mailer opens a throwaway connection, runs ``EHLO``, ``STARTTLS``,
``EHLO``, ``AUTH PLAIN`` and ``QUIT``, and only then keeps a transport for
the real send. The transport opens a fresh connection per message.
"""

from __future__ import annotations

import base64
import logging
import smtplib
import socket
import ssl
from contextlib import contextmanager
from email.errors import MessageError
from email.headerregistry import Address
from email.message import EmailMessage
from typing import Iterator, Optional, Sequence, Tuple

from diditrun.common.errors import (
    AddressResolutionError,
    DidItRunError,
    MailerError,
    MailerIoError,
    MailerTlsError,
    MessageBuildError,
    NoEmailConfigError,
    SmtpProtocolError,
)
from diditrun.config.models import Config, SmtpCredentials
from diditrun.notifications.base import (
    APP_EMAIL,
    APP_NAME,
    NotificationDispatcher,
    NotificationInfo,
)

logger = logging.getLogger(__name__)

AUTHENTICATION_MECHANISM = "PLAIN"

SocketAddress = Tuple[str, int]


class PinnedSMTP(smtplib.SMTP):
    """SMTP client that connects to an already resolved socket address.

    The hostname given to the constructor is kept for STARTTLS certificate
    checks while the TCP connection goes to ``address``. Only the connect
    honours ``connect_timeout``; later commands block without a deadline.
    """

    def __init__(
        self,
        hostname: str,
        port: int,
        *,
        address: SocketAddress,
        connect_timeout: Optional[float] = None,
    ) -> None:
        self._address = address
        self._connect_timeout = connect_timeout
        super().__init__(hostname, port)

    def _get_socket(self, host, port, timeout):
        sock = socket.create_connection(self._address, self._connect_timeout, self.source_address)
        sock.settimeout(None)
        return sock


def resolve_address(hostname: str, port: int) -> SocketAddress:
    """Resolve ``hostname:port`` to the first TCP socket address."""
    try:
        infos = socket.getaddrinfo(hostname, port, type=socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as exc:
        raise AddressResolutionError(
            f"Could not resolve SMTP server {hostname}:{port}: {exc}",
            context={"hostname": hostname, "port": port},
            cause=exc,
        ) from exc
    if not infos:
        raise AddressResolutionError(
            f"SMTP server {hostname}:{port} did not resolve to any address",
            context={"hostname": hostname, "port": port},
        )
    sockaddr = infos[0][4]
    return (sockaddr[0], sockaddr[1])


def build_tls_context() -> ssl.SSLContext:
    """Verifying client context that refuses anything older than TLS 1.2."""
    try:
        context = ssl.create_default_context()
        context.minimum_version = ssl.TLSVersion.TLSv1_2
    except (ssl.SSLError, ValueError) as exc:
        raise MailerTlsError(f"Could not set up TLS: {exc}", cause=exc) from exc
    return context


@contextmanager
def _smtp_errors(step: str, hostname: str) -> Iterator[None]:
    """Translate socket, TLS and SMTP failures into typed mailer errors."""
    context = {"step": step, "hostname": hostname}
    try:
        yield
    except DidItRunError:
        raise
    except ssl.SSLError as exc:
        raise MailerTlsError(f"TLS failure during {step} with {hostname}: {exc}", context=context, cause=exc) from exc
    except smtplib.SMTPResponseException as exc:
        reply = _decode(exc.smtp_error)
        raise SmtpProtocolError(
            f"SMTP server {hostname} rejected {step}: {exc.smtp_code} {reply}",
            context={**context, "code": exc.smtp_code, "reply": reply},
            cause=exc,
        ) from exc
    except smtplib.SMTPException as exc:
        raise SmtpProtocolError(f"SMTP failure during {step} with {hostname}: {exc}", context=context, cause=exc) from exc
    except OSError as exc:
        raise MailerIoError(f"IO error during {step} with {hostname}: {exc}", context=context, cause=exc) from exc


def _decode(reply: bytes | str) -> str:
    if isinstance(reply, bytes):
        return reply.decode("utf-8", errors="replace")
    return reply


def plain_auth_response(username: str, password: str) -> str:
    """Base64 ``AUTH PLAIN`` initial response; credentials are UTF-8 encoded."""
    return base64.b64encode(f"\0{username}\0{password}".encode("utf-8")).decode("ascii")


def _expect(reply: Tuple[int, bytes], expected: int, command: str) -> None:
    code, text = reply
    if code != expected:
        raise smtplib.SMTPResponseException(code, text or f"unexpected reply to {command}".encode())


class SmtpTransport:
    """Authenticated STARTTLS transport bound to one server.

    Every ``send`` negotiates a new session; nothing is pooled.
    """

    def __init__(
        self,
        *,
        address: SocketAddress,
        hostname: str,
        port: int,
        tls_context: ssl.SSLContext,
        username: str,
        password: str,
        connect_timeout: Optional[float] = None,
    ) -> None:
        self.address = address
        self.hostname = hostname
        self.port = port
        self._tls_context = tls_context
        self._username = username
        self._password = password
        self._connect_timeout = connect_timeout

    def _open(self) -> PinnedSMTP:
        with _smtp_errors("connect", self.hostname):
            logger.debug("Connecting to %s (%s:%s)", self.hostname, *self.address)
            client = PinnedSMTP(
                self.hostname,
                self.port,
                address=self.address,
                connect_timeout=self._connect_timeout,
            )
        try:
            with _smtp_errors("EHLO", self.hostname):
                _expect(client.ehlo(), 250, "EHLO")
            with _smtp_errors("STARTTLS", self.hostname):
                _expect(client.starttls(context=self._tls_context), 220, "STARTTLS")
            # The pre-TLS greeting does not carry over the upgrade.
            with _smtp_errors("EHLO", self.hostname):
                _expect(client.ehlo(), 250, "EHLO")
            with _smtp_errors("AUTH", self.hostname):
                response = plain_auth_response(self._username, self._password)
                _expect(client.docmd("AUTH", f"{AUTHENTICATION_MECHANISM} {response}"), 235, "AUTH")
        except DidItRunError:
            client.close()
            raise
        return client

    def _quit(self, client: PinnedSMTP) -> None:
        try:
            with _smtp_errors("QUIT", self.hostname):
                _expect(client.quit(), 221, "QUIT")
        finally:
            client.close()

    def check(self) -> None:
        """Run the full handshake and log out again without sending."""
        client = self._open()
        self._quit(client)
        logger.debug("Credentials for %s accepted", self.hostname)

    def send(self, message: EmailMessage) -> None:
        client = self._open()
        try:
            with _smtp_errors("send", self.hostname):
                mail_options = ["SMTPUTF8"] if client.has_extn("smtputf8") else []
                refused = client.send_message(message, mail_options=mail_options)
                if refused:
                    raise SmtpProtocolError(
                        f"SMTP server {self.hostname} refused recipients: {', '.join(sorted(refused))}",
                        context={"hostname": self.hostname, "refused": sorted(refused)},
                    )
        except DidItRunError:
            client.close()
            raise
        # Delivery already succeeded.
        try:
            self._quit(client)
        except MailerError as exc:
            logger.debug("Ignoring QUIT failure after delivery: %s", exc)


def parse_recipients(recipients: Sequence[str]) -> list[Address]:
    addresses: list[Address] = []
    for raw in recipients:
        try:
            addresses.append(Address(addr_spec=raw.strip()))
        except (ValueError, TypeError, MessageError) as exc:
            raise MessageBuildError(
                f"Invalid recipient address {raw!r}: {exc}",
                context={"recipient": raw},
                cause=exc,
            ) from exc
    return addresses


def build_message(info: NotificationInfo, recipients: Sequence[str]) -> EmailMessage:
    """Multipart message with a plaintext body and an HTML alternative."""
    to = parse_recipients(recipients)
    try:
        message = EmailMessage()
        message["From"] = Address(display_name=APP_NAME, addr_spec=APP_EMAIL)
        message["To"] = to
        message["Subject"] = info.summary
        message.set_content(info.details)
        message.add_alternative(info.html_details, subtype="html")
    except (ValueError, TypeError, MessageError) as exc:
        raise MessageBuildError(f"Could not build notification email: {exc}", cause=exc) from exc
    return message


class Mailer(NotificationDispatcher):
    """Email channel that validates its SMTP credentials up front."""

    def __init__(self, config: Config, credentials: SmtpCredentials) -> None:
        if config.email is None:
            raise NoEmailConfigError("No email config provided.")
        self.recipients = tuple(config.email.recipients)

        hostname = credentials.hostname
        port = credentials.effective_port
        address = resolve_address(hostname, port)
        tls_context = build_tls_context()
        connect_timeout = config.timeout.total_seconds() if config.timeout is not None else None

        self.transport = SmtpTransport(
            address=address,
            hostname=hostname,
            port=port,
            tls_context=tls_context,
            username=credentials.username,
            password=credentials.password,
            connect_timeout=connect_timeout,
        )

        if config.validate_inputs:
            parse_recipients(self.recipients)
            logger.debug("Validating SMTP credentials against %s:%s", hostname, port)
            self.transport.check()

    def dispatch(self, info: NotificationInfo) -> None:
        message = build_message(info, self.recipients)
        logger.debug("Sending notification email to %s", ", ".join(self.recipients))
        self.transport.send(message)
