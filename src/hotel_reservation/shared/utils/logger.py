import os

from aws_lambda_powertools import Logger


def get_logger(default_service: str) -> Logger:
    """アプリケーション層で使う Powertools Logger を返す

    Lambda 上では関数ごとの POWERTOOLS_SERVICE_NAME を優先し、ハンドラの Logger と
    同じロガーを共有する（inject_lambda_context のキーが業務ログにも付く）。
    """
    return Logger(service=os.getenv("POWERTOOLS_SERVICE_NAME") or default_service)
