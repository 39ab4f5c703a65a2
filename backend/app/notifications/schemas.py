# backend/app/notifications/schemas.py

"""
通知メッセージの共通スキーマ定義。

件名と本文、生成時刻のみを扱う。宛先や送信元は Sender 実装側の設定に持たせる。
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class NotificationMessage(BaseModel):
    """
    通知 1件分の情報。

    body はプレーンテキスト想定（行区切りは CRLF）。
    """

    subject: str = Field(
        ...,
        description="メール件名。",
    )
    body: str = Field(
        ...,
        description="本文。空文字も許容する。",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="通知生成時刻（UTC）。",
    )
