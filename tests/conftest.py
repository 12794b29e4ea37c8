import os
from dataclasses import dataclass

import pytest

# ハンドラモジュールはインポート時に boto3 リソースを生成するため、先に設定しておく
os.environ.setdefault("AWS_DEFAULT_REGION", "ap-northeast-1")
os.environ.setdefault("TABLE_NAME", "test-table")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "test")


@dataclass
class FakeLambdaContext:
    function_name: str = "test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:ap-northeast-1:123456789012:function:test"
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"


@pytest.fixture
def lambda_context():
    """Powertools の inject_lambda_context 用のダミーコンテキスト"""
    return FakeLambdaContext()
