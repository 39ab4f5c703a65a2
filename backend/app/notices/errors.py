# backend/app/notices/errors.py

"""
お知らせ機能で使う例外の定義。

- ValidationError: 受信ペイロードの形式不正（クライアント側エラー）
- StorageError: ドキュメントストアの読み書き失敗（サーバ側エラー）

メール送信失敗（DeliveryError）は app.notifications.service 側で定義する。
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class NoticeServiceError(RuntimeError):
    """お知らせ機能全般の基底例外。"""


class ValidationError(NoticeServiceError):
    """subject / deadline が欠落・パース不能な場合の例外。"""

    def __init__(
        self,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        super().__init__(message)
        self.errors: List[Dict[str, Any]] = errors or []


class StorageError(NoticeServiceError):
    """ドキュメントストアに到達できない・書き込みを確定できない場合の例外。"""
