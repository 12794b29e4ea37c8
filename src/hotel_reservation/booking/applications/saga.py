from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType
from typing import Callable, TypeVar

from hotel_reservation.shared.utils import get_logger

logger = get_logger("booking-service")

T = TypeVar("T")


@dataclass(frozen=True)
class SagaStep:
    """実行済みのステップとその補償処理"""

    name: str
    compensation: Callable[[], None] | None


class Saga:
    """補償トランザクション付きの手続き

    with ブロック内で execute したステップを順に記録し、ブロック内で例外が
    発生したら完了済みステップの補償を逆順に実行してから例外を再送出する。
    補償自体の失敗はログに残して残りの補償を続ける。

        with Saga("create-booking") as saga:
            redemption = saga.execute("redeem-points", redeem, undo_redeem)
            saga.execute("reserve-room", reserve, release)
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._completed: list[SagaStep] = []

    @property
    def completed_steps(self) -> list[str]:
        return [step.name for step in self._completed]

    def execute(
        self,
        name: str,
        action: Callable[[], T],
        compensation: Callable[[T], None] | None = None,
    ) -> T:
        """ステップを実行し、成功したら補償処理を登録する"""
        result = action()
        undo = None
        if compensation is not None:

            def undo() -> None:
                compensation(result)

        self._completed.append(SagaStep(name=name, compensation=undo))
        return result

    def compensate(self) -> None:
        """完了済みステップを逆順に取り消す"""
        while self._completed:
            step = self._completed.pop()
            if step.compensation is None:
                continue
            try:
                step.compensation()
                logger.info(
                    "Compensated saga step",
                    extra={"saga": self._name, "step": step.name},
                )
            except Exception:
                logger.exception(
                    "Compensation failed",
                    extra={"saga": self._name, "step": step.name},
                )

    def __enter__(self) -> Saga:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc_type is not None:
            logger.warning(
                "Saga failed, compensating",
                extra={
                    "saga": self._name,
                    "completed_steps": self.completed_steps,
                    "error": str(exc),
                },
            )
            self.compensate()
        return False
