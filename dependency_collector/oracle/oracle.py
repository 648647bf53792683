"""依存解析ツールの呼び出し"""

import re
import subprocess
from pathlib import Path
from typing import Protocol

from loguru import logger
from pydantic import ValidationError

from .model import DependencyReport


class OracleInvocationError(Exception):
    """依存解析ツールの実行、あるいは出力の解析に失敗したエラー"""

    pass


class DependencyOracle(Protocol):
    """ファイルが直接依存するモジュールを返すもの"""

    def scan(self, file_path: Path) -> dict[str, Path | None]:
        """
        指定ファイルが直接依存するモジュールを取得する。
        Parameters
        ----------
        file_path : Path
            実行ファイルあるいは DLL のパス
        Returns
        -------
        dependencies : dict[str, Path | None]
            モジュール名から解決済みパスへの対応。解決できなかったモジュールは None
        """
        ...


def filter_dependencies(
    dependencies: dict[str, Path | None], include_pattern: re.Pattern[str]
) -> dict[str, Path | None]:
    """`include_pattern` にマッチするモジュール名のみを残す。"""
    return {
        name: path
        for name, path in dependencies.items()
        if include_pattern.search(name)
    }


class DependenciesOracle:
    """
    Dependencies (https://github.com/lucasg/Dependencies) を用いた依存解析

    解析の深さは常に 1 とし、再帰的な探索は `DependencyResolver` が担う。
    """

    def __init__(self, dependencies_path: Path, include_pattern: re.Pattern[str]):
        self.dependencies_path = dependencies_path
        self.include_pattern = include_pattern

    def _run(self, file_path: Path) -> str:
        """Dependencies を実行し標準出力を返す。"""
        args = [
            str(self.dependencies_path),
            "-json",
            "-depth",
            "1",
            "-chain",
            str(file_path),
        ]
        logger.debug(f"Scanning {file_path}")
        try:
            proc = subprocess.run(args, capture_output=True)
        except OSError as e:
            msg = f"Dependencies を実行できません: {self.dependencies_path}"
            raise OracleInvocationError(msg) from e
        if proc.returncode != 0:
            stderr = proc.stderr.decode("utf-8", errors="replace").strip()
            msg = (
                f"Dependencies が異常終了しました (returncode={proc.returncode}): "
                f"{file_path}\n{stderr}"
            )
            raise OracleInvocationError(msg)
        try:
            return proc.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            msg = f"Dependencies の出力を UTF-8 として読み込めません: {file_path}"
            raise OracleInvocationError(msg) from e

    def scan(self, file_path: Path) -> dict[str, Path | None]:
        if not file_path.exists():
            raise FileNotFoundError(f"ファイルが見つかりません: {file_path}")

        output = self._run(file_path)
        try:
            report = DependencyReport.model_validate_json(output)
        except ValidationError as e:
            msg = f"Dependencies の出力を解析できません: {file_path}"
            raise OracleInvocationError(msg) from e

        # 同名のモジュールが複数回現れた場合は後のものを採用する
        dependencies: dict[str, Path | None] = {}
        for dep in report.root.dependencies or []:
            dependencies[dep.module_name] = Path(dep.file_path) if dep.file_path else None
        return filter_dependencies(dependencies, self.include_pattern)
