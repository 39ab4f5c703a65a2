# backend/app/utils/clock.py

"""
「現在時刻」を差し替え可能にするための Clock 抽象。

残り日数のように読み出し時点の時刻に依存する値を、
テストで決定的に検証できるようにする。
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """現在時刻を返す最小インターフェース。"""

    def now(self) -> datetime:  # pragma: no cover - Protocol
        ...


class SystemClock:
    """
    OS のローカルタイムゾーン付きで現在時刻を返す本番用 Clock。
    """

    def now(self) -> datetime:
        return datetime.now().astimezone()


class FixedClock:
    """
    常に同じ時刻を返す Clock。テストやリプレイ用。
    """

    def __init__(self, fixed: datetime) -> None:
        self._fixed = fixed

    def now(self) -> datetime:
        return self._fixed

    def set(self, fixed: datetime) -> None:
        self._fixed = fixed
