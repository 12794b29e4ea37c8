from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")
ID = TypeVar("ID")


class Repository(ABC, Generic[T, ID]):
    """集約リポジトリの基底クラス

    save は新規作成のみ（条件付き書き込み）。既存の集約を上書きする場合は
    DuplicateResourceException を送出する。状態の更新は各リポジトリが
    期待する現在の状態を条件にした専用メソッドで行う。
    """

    @abstractmethod
    def save(self, aggregate: T) -> None:
        """集約を新規に永続化する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, id: ID) -> T | None:
        """IDで集約を検索する（見つからなければ None）"""
        raise NotImplementedError
