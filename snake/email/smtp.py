"""Queued e-mail delivery over SMTP."""

from __future__ import annotations

import logging
import queue
import smtplib
import threading
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import Any

from snake.conf import EmailConfig

logger = logging.getLogger(__name__)

QUEUE_SIZE = 30
RETRY_DELAY = 10.0
_STOP = object()
_SMTP_ERRORS = (OSError, smtplib.SMTPException)


class ChannelNotOpenError(RuntimeError):
    """The mail queue is not running."""

    def __init__(self) -> None:
        super().__init__("email queue does not open")


@dataclass
class SMTPConfig:
    """SMTP server and sender settings; ``keepalive`` is in seconds."""

    name: str = ""
    address: str = ""
    reply_to: str = ""
    host: str = ""
    port: int = 0
    username: str = ""
    password: str = ""
    keepalive: int = 0


class SMTPClient:
    """Sends mail from a queue on a background thread.

    The connection is opened on demand and closed after ``keepalive`` idle seconds.
    """

    def __init__(self, config: SMTPConfig) -> None:
        self.config = config
        self._queue: queue.Queue = queue.Queue(maxsize=QUEUE_SIZE)
        self._open = False
        self._closed = False
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_open(self) -> bool:
        """Whether messages are currently accepted."""
        return self._open and not self._closed

    def init(self) -> None:
        """Start the delivery thread."""
        if self._closed:
            raise ChannelNotOpenError()
        if self._thread is not None and self._thread.is_alive():
            return
        self._thread = threading.Thread(target=self._run, name="smtp-queue", daemon=True)
        self._open = True
        self._thread.start()

    def send(self, to: str, subject: str, body: str) -> None:
        """Queue an HTML message for delivery."""
        if not self.is_open:
            raise ChannelNotOpenError()
        self._queue.put(self._build_message(to, subject, body))

    def close(self) -> None:
        """Stop accepting mail and let the thread finish what is queued."""
        if self._closed:
            return
        self._closed = True
        self._stop.set()
        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return
        while thread.is_alive():
            try:
                self._queue.put(_STOP, timeout=0.1)
                break
            except queue.Full:
                continue
        thread.join(timeout=self.config.keepalive + 10)

    def _build_message(self, to: str, subject: str, body: str) -> EmailMessage:
        cfg = self.config
        msg = EmailMessage()
        msg["From"] = formataddr((cfg.name, cfg.address))
        msg["Reply-To"] = formataddr((cfg.name, cfg.reply_to))
        msg["Subject"] = subject
        msg["To"] = to
        msg.set_content(body, subtype="html")
        return msg

    def _dial(self) -> Any:
        cfg = self.config
        timeout = cfg.keepalive + 5
        if cfg.port == 465:
            conn = smtplib.SMTP_SSL(cfg.host, cfg.port, timeout=timeout)
        else:
            conn = smtplib.SMTP(cfg.host, cfg.port, timeout=timeout)
            conn.ehlo()
            if conn.has_extn("starttls"):
                conn.starttls()
                conn.ehlo()
        if cfg.username:
            conn.login(cfg.username, cfg.password)
        return conn

    @staticmethod
    def _hang_up(conn: Any) -> None:
        if conn is None:
            return
        try:
            conn.quit()
        except _SMTP_ERRORS as exc:
            logger.warning("can not close smtp conn, %s", exc)

    def _run(self) -> None:
        conn = None
        try:
            while True:
                timeout = None if conn is None else float(max(self.config.keepalive, 0))
                try:
                    item = self._queue.get(timeout=timeout)
                except queue.Empty:
                    self._hang_up(conn)
                    conn = None
                    continue
                if item is _STOP:
                    logger.info("mail queue is close")
                    break
                if conn is None:
                    try:
                        conn = self._dial()
                    except _SMTP_ERRORS as exc:
                        self._open = False
                        logger.error(
                            "send email queue err: %s, retry after %s second", exc, RETRY_DELAY
                        )
                        if self._stop.wait(RETRY_DELAY):
                            break
                        self._open = True
                        continue
                try:
                    conn.send_message(item)
                    logger.info("email has send")
                except _SMTP_ERRORS as exc:
                    logger.warning("email send failed, %s", exc)
                    self._hang_up(conn)
                    conn = None
        finally:
            self._open = False
            self._hang_up(conn)


_client: SMTPClient | None = None
_lock = threading.Lock()


def _as_smtp_config(config: SMTPConfig | EmailConfig) -> SMTPConfig:
    if isinstance(config, SMTPConfig):
        return config
    return SMTPConfig(
        name=config.name,
        address=config.address,
        reply_to=config.reply_to,
        host=config.host,
        port=config.port,
        username=config.username,
        password=config.password,
        keepalive=config.keep_alive,
    )


def init(config: SMTPConfig | EmailConfig) -> SMTPClient:
    """Replace the default client with a new one built from ``config``."""
    global _client
    with _lock:
        if _client is not None:
            _client.close()
        _client = SMTPClient(_as_smtp_config(config))
        return _client


def send(to: str, subject: str, body: str) -> None:
    """Send with the default client; nothing happens when there is none."""
    with _lock:
        client = _client
    if client is None:
        return
    client.send(to, subject, body)