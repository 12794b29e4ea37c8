import logging
import subprocess
from pathlib import Path

import jsii
from aws_cdk import BundlingOptions, ILocalBundling
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

logger = logging.getLogger(__name__)

RUNTIME = _lambda.Runtime.PYTHON_3_14
LAYER_SOURCE_PATH = "layers/runtime"


@jsii.implements(ILocalBundling)
class PythonLocalBundling:
    """requirements.txt をローカルでインストールする Bundling クラス

    uv → pip の順に試し、どちらも使えなければ Docker にフォールバックする。
    """

    INSTALLERS: tuple[tuple[str, ...], ...] = (
        ("uv", "pip", "install", "--quiet", "--target"),
        ("pip", "install", "--quiet", "-t"),
    )

    def __init__(self, source_path: str) -> None:
        self.source_path = source_path

    def try_bundle(self, output_dir: str, options: BundlingOptions) -> bool:
        """ローカルでバンドリングを試行する。

        Returns:
            True: バンドリング成功（Dockerをスキップ）
            False: バンドリング失敗（Dockerにフォールバック）
        """
        del options  # unused
        requirements_path = Path(self.source_path) / "requirements.txt"
        if not requirements_path.exists():
            logger.warning("requirements.txt not found: %s", requirements_path)
            return False

        target_dir = Path(output_dir) / "python"
        for installer in self.INSTALLERS:
            if self._install(installer, requirements_path, target_dir):
                return True

        logger.warning("Local bundling failed, falling back to Docker")
        return False

    def _install(
        self, installer: tuple[str, ...], requirements_path: Path, target_dir: Path
    ) -> bool:
        command = [*installer, str(target_dir), "-r", str(requirements_path)]
        try:
            logger.info("Trying local bundling with %s...", installer[0])
            subprocess.run(command, check=True)
        except FileNotFoundError:
            logger.debug("%s not found", installer[0])
            return False
        except subprocess.CalledProcessError as e:
            logger.debug("%s install failed: %s", installer[0], e)
            return False
        logger.info("Local bundling with %s succeeded", installer[0])
        return True


class Layers(Construct):
    """Lambda Layers Construct（Powertools・pydantic などの実行時依存）"""

    def __init__(self, scope: Construct, id: str) -> None:
        super().__init__(scope, id)

        self.runtime_layer = _lambda.LayerVersion(
            self,
            "RuntimeLayer",
            code=_lambda.Code.from_asset(
                LAYER_SOURCE_PATH,
                bundling=BundlingOptions(
                    image=RUNTIME.bundling_image,
                    command=[
                        "bash",
                        "-c",
                        "pip install -r requirements.txt -t /asset-output/python",
                    ],
                    local=PythonLocalBundling(LAYER_SOURCE_PATH),
                ),
            ),
            compatible_runtimes=[RUNTIME],
            description="Hotel reservation runtime dependencies",
        )
