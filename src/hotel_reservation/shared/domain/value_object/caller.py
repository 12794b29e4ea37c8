from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .user_id import UserId


class Role(str, Enum):
    """ユーザーロール"""

    GUEST = "Guest"
    MANAGER = "Manager"
    ADMIN = "Admin"


@dataclass(frozen=True)
class Caller:
    """呼び出し元のコンテキスト（認証済みユーザーとロール）

    ロール判定はここに閉じ込め、業務ロジックには権限フラグとして渡す。
    """

    user_id: UserId | None
    role: Role = Role.GUEST

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def waives_booking_limits(self) -> bool:
        """重複予約・宿泊日数・事前予約期限の制約を免除されるか"""
        return self.role in (Role.MANAGER, Role.ADMIN)

    @property
    def can_manage_any_booking(self) -> bool:
        """他人の予約を参照・キャンセルできるか"""
        return self.role == Role.ADMIN

    def owns(self, user_id: UserId | None) -> bool:
        return self.user_id is not None and self.user_id == user_id

    @classmethod
    def anonymous(cls) -> Caller:
        return cls(user_id=None, role=Role.GUEST)
