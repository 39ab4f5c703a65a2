# backend/app/notices/schemas.py

"""
お知らせ（Notice）関連のスキーマ定義。

- Notice: リポジトリが扱うエンティティ。残り日数は保存せず読み出し時に計算する
- NoticeCreateRequest: POST /notice の受信ペイロード
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class Notice(BaseModel):
    """
    お知らせ 1件分。

    id はリポジトリが保存時に採番する。保存前は None。
    """

    id: Optional[str] = Field(
        None,
        description="リポジトリが採番する識別子（保存前は None）。",
    )
    subject: str = Field(..., description="お知らせの件名。")
    deadline: datetime = Field(..., description="締め切り日時。")

    def days_left(self, now: datetime) -> int:
        """
        締め切りまでの残り日数を返す。

        時刻部分は無視し、日付同士の差分だけを見る。過去の締め切りは負数。
        deadline と now の両方にオフセットがある場合は、
        now 側のタイムゾーンに揃えてから日付を取り出す。
        """
        deadline = self.deadline
        if deadline.tzinfo is not None and now.tzinfo is not None:
            deadline = deadline.astimezone(now.tzinfo)
        return (deadline.date() - now.date()).days


class NoticeCreateRequest(BaseModel):
    """
    POST /notice のリクエストボディ。

    旧クライアントは "Subject" / "Deadline" のような先頭大文字の
    プロパティ名で送ってくるため、エイリアスとして受け付ける。
    """

    subject: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("subject", "Subject"),
        description="お知らせの件名（空文字は不可）。",
    )
    deadline: datetime = Field(
        ...,
        validation_alias=AliasChoices("deadline", "Deadline"),
        description="締め切り日時（ISO8601）。",
    )

    def to_notice(self) -> Notice:
        return Notice(subject=self.subject, deadline=self.deadline)
