# backend/app/notices/service.py

"""
お知らせの登録と、全件まとめたメール通知を行うサービス層。

- create_notice: 受信ペイロードをデコードしてリポジトリに保存する
- send_notice_notification: 全件の残り日数を計算し、1 通のメールにまとめて送る

リポジトリ・メール送信・時計はすべてコンストラクタで受け取り、
サービス自身はリクエスト間で状態を持たない。
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from app.notifications.service import EmailSender
from app.utils.clock import Clock, SystemClock

from .errors import ValidationError
from .repository import NoticeRepository
from .schemas import Notice, NoticeCreateRequest

logger = logging.getLogger(__name__)

NOTIFICATION_SUBJECT = "Notices"
LINE_SEPARATOR = "\r\n"

NoticePayload = Union[bytes, str, Mapping[str, Any]]


def format_notice_line(notice: Notice, now: datetime) -> str:
    """
    お知らせ 1件を "<subject> - <days_left> days left" 形式の 1 行にする。
    """
    return f"{notice.subject} - {notice.days_left(now)} days left"


def compose_notification_body(notices: Iterable[Notice], now: datetime) -> str:
    """
    お知らせの並び順を保ったまま 1 行ずつ整形し、CRLF で連結する。

    0 件の場合は空文字になる。
    """
    return LINE_SEPARATOR.join(format_notice_line(notice, now) for notice in notices)


def _errors_for_detail(exc: PydanticValidationError) -> List[dict]:
    # ctx には例外オブジェクトが入ることがあり JSON 化できないため落とす
    return [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]


class NoticeService:
    """
    NoticeRepository と EmailSender をつなぐサービス。

    例外はすべてそのまま呼び出し元へ伝播させる:
    - ペイロード不正 → ValidationError
    - ストア障害 → StorageError
    - 送信失敗 → DeliveryError
    """

    def __init__(
        self,
        repository: NoticeRepository,
        email_sender: EmailSender,
        clock: Optional[Clock] = None,
    ) -> None:
        self._repository = repository
        self._email_sender = email_sender
        self._clock = clock or SystemClock()

    def _decode(self, payload: NoticePayload) -> NoticeCreateRequest:
        try:
            if isinstance(payload, (bytes, str)):
                return NoticeCreateRequest.model_validate_json(payload)
            return NoticeCreateRequest.model_validate(payload)
        except PydanticValidationError as exc:
            raise ValidationError(
                "Notice payload must contain a non-empty 'subject' "
                "and an ISO-8601 'deadline'.",
                errors=_errors_for_detail(exc),
            ) from exc

    def create_notice(self, payload: NoticePayload) -> Notice:
        """
        ペイロードからお知らせを 1件作成して保存する。

        :param payload: JSON 文字列 / バイト列、またはデコード済みの dict
        :return: id が採番された Notice
        """
        request = self._decode(payload)
        saved = self._repository.save(request.to_notice())
        logger.info("Created notice %s (deadline=%s).", saved.id, saved.deadline.isoformat())
        return saved

    def send_notice_notification(self) -> None:
        """
        全お知らせの残り日数を 1 通のメールにまとめて送信する。

        0 件でも空本文のまま送信する。
        """
        notices = self._repository.list_all()
        now = self._clock.now()
        body = compose_notification_body(notices, now)

        self._email_sender.send(NOTIFICATION_SUBJECT, body)
        logger.info("Sent notice notification covering %d notice(s).", len(notices))
