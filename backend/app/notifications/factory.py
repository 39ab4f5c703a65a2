# backend/app/notifications/factory.py

"""
メール送信サービスの簡易ファクトリ。

環境変数の SMTP 設定から SmtpEmailSender を 1 つだけ生成し、アプリ全体で共有する。
"""

from __future__ import annotations

from typing import Optional

from .config import get_smtp_settings
from .service import EmailSender, SmtpEmailSender

_email_sender: Optional[EmailSender] = None


def get_email_sender() -> EmailSender:
    """
    アプリ全体で共有する EmailSender を返す。

    初回呼び出し時にのみ生成し、それ以降は同じインスタンスを返す。
    """
    global _email_sender
    if _email_sender is None:
        _email_sender = SmtpEmailSender(get_smtp_settings())
    return _email_sender


def reset_email_sender() -> None:
    """
    テスト用に共有インスタンスと設定キャッシュをリセットする。
    """
    global _email_sender
    _email_sender = None
    get_smtp_settings.cache_clear()
