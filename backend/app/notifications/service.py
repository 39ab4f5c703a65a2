# backend/app/notifications/service.py

"""
メール送信インターフェースと実装。

- send(subject, body) のみを持つ EmailSender インターフェース
- SMTP サーバ経由で送る SmtpEmailSender（本番用）
- 送信内容を記録するだけの InMemoryEmailSender（テスト用）

送信は同期的で、失敗時は DeliveryError をそのまま呼び出し元へ返す。
リトライやキューイングは行わない。
"""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import List, Protocol

from .config import SmtpSettings
from .schemas import NotificationMessage

logger = logging.getLogger(__name__)


class DeliveryError(RuntimeError):
    """メール送信（送信受付）に失敗した場合の例外。"""


class EmailSender(Protocol):
    """
    メール送信の最小インターフェース。

    実装例:
    - SmtpEmailSender: SMTP サーバへ送信
    - InMemoryEmailSender: メモリに記録するだけ
    """

    def send(self, subject: str, body: str) -> None:  # pragma: no cover - Protocol
        ...


class SmtpEmailSender:
    """
    SMTP サーバ経由でプレーンテキストメールを送る Sender。

    - 1 回の send() ごとに接続を開いて閉じる
    - 設定に応じて SMTP_SSL / STARTTLS / ログインを行う
    """

    def __init__(self, settings: SmtpSettings) -> None:
        self._settings = settings

    def _build_message(self, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self._settings.mail_from
        message["To"] = ", ".join(self._settings.mail_to)
        message["Subject"] = subject
        message.set_content(body)
        return message

    def _connect(self) -> smtplib.SMTP:
        settings = self._settings
        if settings.use_ssl:
            return smtplib.SMTP_SSL(
                settings.host, settings.port, timeout=settings.timeout_seconds
            )
        return smtplib.SMTP(
            settings.host, settings.port, timeout=settings.timeout_seconds
        )

    def send(self, subject: str, body: str) -> None:
        """
        メールを 1 通送信する。

        :raises DeliveryError: 接続・認証・送信のいずれかに失敗した場合
        """
        settings = self._settings
        message = self._build_message(subject, body)

        try:
            with self._connect() as smtp:
                if settings.use_tls and not settings.use_ssl:
                    smtp.starttls()
                if settings.username:
                    smtp.login(settings.username, settings.password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryError(
                f"Failed to send email via {settings.host}:{settings.port}: {exc}"
            ) from exc

        logger.info(
            "Sent email %r to %d recipient(s).", subject, len(settings.mail_to)
        )


class InMemoryEmailSender:
    """
    送信内容を NotificationMessage として sent に積むだけの Sender。
    """

    def __init__(self) -> None:
        self.sent: List[NotificationMessage] = []

    def send(self, subject: str, body: str) -> None:
        self.sent.append(NotificationMessage(subject=subject, body=body))
        logger.info("Recorded email %r in memory.", subject)
