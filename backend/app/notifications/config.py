# backend/app/notifications/config.py

"""
メール送信（SMTP）に必要な設定値をまとめるモジュール。
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from app.utils.config import get_env, get_env_bool, get_env_int


@dataclass(frozen=True)
class SmtpSettings:
    """SMTP 送信用の設定値コンテナ。"""

    host: str
    port: int
    mail_from: str
    mail_to: Tuple[str, ...]
    username: Optional[str] = None
    password: Optional[str] = None
    use_tls: bool = False
    use_ssl: bool = False
    timeout_seconds: int = 10


def _split_recipients(raw: str) -> Tuple[str, ...]:
    return tuple(addr.strip() for addr in raw.split(",") if addr.strip())


@lru_cache()
def get_smtp_settings() -> SmtpSettings:
    """
    環境変数から SMTP 設定を読み込む。

    必須:
      - NOTICES_MAIL_TO  (カンマ区切りで複数指定可)

    任意:
      - NOTICES_SMTP_HOST            (デフォルト: localhost)
      - NOTICES_SMTP_PORT            (デフォルト: 25)
      - NOTICES_SMTP_USERNAME / NOTICES_SMTP_PASSWORD
      - NOTICES_SMTP_USE_TLS         (デフォルト: false, STARTTLS)
      - NOTICES_SMTP_USE_SSL         (デフォルト: false, SMTP_SSL)
      - NOTICES_SMTP_TIMEOUT_SECONDS (デフォルト: 10)
      - NOTICES_MAIL_FROM            (デフォルト: notices@localhost)
    """
    mail_to = _split_recipients(get_env("NOTICES_MAIL_TO"))
    if not mail_to:
        raise RuntimeError("NOTICES_MAIL_TO does not contain any address.")

    return SmtpSettings(
        host=get_env("NOTICES_SMTP_HOST", default="localhost", required=False),
        port=get_env_int("NOTICES_SMTP_PORT", default=25),
        mail_from=get_env(
            "NOTICES_MAIL_FROM", default="notices@localhost", required=False
        ),
        mail_to=mail_to,
        username=get_env("NOTICES_SMTP_USERNAME", required=False),
        password=get_env("NOTICES_SMTP_PASSWORD", required=False),
        use_tls=get_env_bool("NOTICES_SMTP_USE_TLS"),
        use_ssl=get_env_bool("NOTICES_SMTP_USE_SSL"),
        timeout_seconds=get_env_int("NOTICES_SMTP_TIMEOUT_SECONDS", default=10),
    )
