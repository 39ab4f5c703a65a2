# backend/app/notices/config.py

"""
お知らせストア（ドキュメントストア）関連の設定値読み出しモジュール。
"""

from dataclasses import dataclass
from functools import lru_cache

from app.utils.config import get_env, get_env_int

SUPPORTED_BACKENDS = ("mongodb", "memory")


@dataclass(frozen=True)
class NoticeStoreSettings:
    """お知らせストア用の設定値コンテナ。"""

    backend: str
    mongodb_uri: str
    database: str
    collection: str
    timeout_ms: int


@lru_cache()
def get_notice_store_settings() -> NoticeStoreSettings:
    """
    環境変数からお知らせストア設定を読み込む。

    任意:
      - NOTICES_STORAGE_BACKEND    (デフォルト: mongodb / memory も可)
      - NOTICES_MONGODB_URI        (デフォルト: mongodb://localhost:27017)
      - NOTICES_MONGODB_DATABASE   (デフォルト: notices)
      - NOTICES_MONGODB_COLLECTION (デフォルト: notices)
      - NOTICES_MONGODB_TIMEOUT_MS (デフォルト: 5000)
    """
    backend = get_env(
        "NOTICES_STORAGE_BACKEND", default="mongodb", required=False
    ).lower()
    if backend not in SUPPORTED_BACKENDS:
        raise RuntimeError(
            f"Unsupported NOTICES_STORAGE_BACKEND: {backend!r} "
            f"(expected one of {', '.join(SUPPORTED_BACKENDS)})"
        )

    return NoticeStoreSettings(
        backend=backend,
        mongodb_uri=get_env(
            "NOTICES_MONGODB_URI",
            default="mongodb://localhost:27017",
            required=False,
        ),
        database=get_env(
            "NOTICES_MONGODB_DATABASE", default="notices", required=False
        ),
        collection=get_env(
            "NOTICES_MONGODB_COLLECTION", default="notices", required=False
        ),
        timeout_ms=get_env_int("NOTICES_MONGODB_TIMEOUT_MS", default=5000),
    )
