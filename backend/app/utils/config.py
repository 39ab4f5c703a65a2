# backend/app/utils/config.py

"""
環境変数読み取り用のユーティリティ。
ストア（MongoDB）・メール送信（SMTP）・サーバ起動設定で共通利用する。
"""

import os
from typing import Optional


class EnvVarMissingError(RuntimeError):
    """必須環境変数が設定されていない場合に投げる例外。"""

    def __init__(self, name: str) -> None:
        super().__init__(f"Required environment variable '{name}' is not set.")
        self.name = name


def get_env(
    name: str,
    default: Optional[str] = None,
    *,
    required: bool = True,
) -> str:
    """
    環境変数を取得するヘルパー。

    :param name: 環境変数名
    :param default: デフォルト値（required=False の場合のみ使用）
    :param required: True の場合、未設定なら例外を投げる
    :return: 文字列値
    """
    value = os.getenv(name)

    if value is None or value == "":
        if required:
            raise EnvVarMissingError(name)
        return default

    return value


def get_env_int(name: str, default: int) -> int:
    """
    整数値の環境変数を取得するヘルパー。

    未設定なら default、不正な値が入っていた場合は RuntimeError にする。
    """
    raw = get_env(name, required=False)
    if raw is None:
        return default

    try:
        return int(raw)
    except ValueError as exc:  # noqa: TRY003
        raise RuntimeError(
            f"Invalid integer value for env var {name}: {raw!r}"
        ) from exc


def get_env_bool(name: str, default: bool = False) -> bool:
    """
    真偽値の環境変数を取得するヘルパー。

    "1" / "true" / "yes" / "on" を True とみなす（大文字小文字は区別しない）。
    """
    raw = get_env(name, required=False)
    if raw is None:
        return default

    return raw.strip().lower() in ("1", "true", "yes", "on")
