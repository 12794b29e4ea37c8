class DomainException(Exception):
    """ドメイン層で発生する基底例外"""

    pass


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    pass


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合"""

    pass


class ValidationException(DomainException):
    """入力検証エラー（副作用を起こす前に検出されたもの）

    複数の違反理由をまとめて保持する。
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(", ".join(self.errors))


class UnauthorizedException(DomainException):
    """呼び出し元に所有権・権限がない場合"""

    pass


class ResourceUnavailableException(DomainException):
    """在庫・ポイント残高などのリソースが不足している場合"""

    pass


class NoRoomsAvailableException(ResourceUnavailableException):
    """空室がない場合"""

    pass


class InsufficientPointsException(ResourceUnavailableException):
    """ポイント残高が不足している場合"""

    pass


class RefundFailedException(DomainException):
    """払い戻しに失敗した場合（キャンセル処理は中断される）"""

    pass


class DuplicateResourceException(DomainException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    pass


class OptimisticLockException(DomainException):
    """楽観ロックの競合エラー（ステータスが期待値と異なる場合）"""

    pass
