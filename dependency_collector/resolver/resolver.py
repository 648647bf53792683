"""依存 DLL の推移的な収集"""

import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from ..oracle.oracle import DependencyOracle
from .worklist import Worklist


class UnresolvedDependencyError(Exception):
    """検索ディレクトリのどこにも見つからないモジュールがあるエラー"""

    def __init__(self, module_names: list[str]):
        self.module_names = module_names
        super().__init__(
            "\n".join(f"Can not find {module_name}" for module_name in module_names)
        )


@dataclass(frozen=True)
class ResolutionResult:
    """依存解決の結果"""

    copied_files: list[str]  # 対象ディレクトリへコピーしたモジュール（コピー順）
    present_files: list[str]  # 解析ツールが既に解決していたモジュール
    unresolved: list[str]  # どの検索ディレクトリにも見つからなかったモジュール
    passes: int  # 待ち行列を走査した回数
    elapsed_seconds: float  # 収集に要した時間

    def raise_for_unresolved(self) -> None:
        """見つからなかったモジュールがあれば `UnresolvedDependencyError` を送出する。"""
        if self.unresolved:
            raise UnresolvedDependencyError(self.unresolved)


@dataclass
class _Progress:
    copied_files: list[str] = field(default_factory=list)
    present_files: list[str] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)


def find_module_file(module_name: str, search_dirs: list[Path]) -> Path | None:
    """
    検索ディレクトリを順に調べ、モジュール名と同名のファイルを最初に見つけた場所を返す。
    見つからなければ None を返す。
    """
    for search_dir in search_dirs:
        for path in search_dir.iterdir():
            if path.name == module_name and path.is_file():
                return path
    return None


class DependencyResolver:
    """
    実行ファイルが推移的に依存する DLL を収集する

    解析ツールが解決できなかった DLL を検索ディレクトリから探し、対象ディレクトリへコピーする。
    コピーした DLL もまた解析し、新たな依存が見つからなくなるまで繰り返す。
    """

    def __init__(
        self,
        oracle: DependencyOracle,
        search_dirs: list[Path],
        target_dir: Path,
        fail_fast: bool = False,
    ):
        """
        Parameters
        ----------
        oracle : DependencyOracle
            直接の依存を返す解析器
        search_dirs : list[Path]
            不足している DLL を探すディレクトリ。先に指定したものが優先される
        target_dir : Path
            DLL のコピー先
        fail_fast : bool
            見つからない DLL があった時点で `UnresolvedDependencyError` を送出するか否か
        """
        self.oracle = oracle
        self.search_dirs = search_dirs
        self.target_dir = target_dir
        self.fail_fast = fail_fast

    def _copy_module(self, module_name: str, src: Path) -> Path:
        """見つかった DLL を対象ディレクトリへコピーする。既存のファイルは上書きする。"""
        dest = self.target_dir / module_name
        logger.info(f"Copying {module_name}...")
        shutil.copy(src, dest)
        return dest

    def _run_pass(self, worklist: Worklist, progress: _Progress) -> Worklist:
        """
        待ち行列を 1 回走査する。
        走査中に見つかった依存は次回の走査で処理される。
        """
        for module_name, file_path in worklist.snapshot():
            if file_path is not None:
                # 解析ツールが既に場所を知っている
                worklist.remove(module_name)
                progress.present_files.append(module_name)
                next_path = file_path
            else:
                found = find_module_file(module_name, self.search_dirs)
                worklist.remove(module_name)
                if found is None:
                    progress.unresolved.append(module_name)
                    if self.fail_fast:
                        raise UnresolvedDependencyError([module_name])
                    logger.warning(f"Can not find {module_name}")
                    continue
                next_path = self._copy_module(module_name, found)
                progress.copied_files.append(module_name)

            added = worklist.enqueue(self.oracle.scan(next_path))
            for child in added:
                logger.debug(f"{module_name} depends on {child}")
        return worklist

    def resolve(self, executable_path: Path) -> ResolutionResult:
        """
        実行ファイルの依存を解決する。
        Parameters
        ----------
        executable_path : Path
            依存を収集する実行ファイル
        Returns
        -------
        result : ResolutionResult
            コピーしたモジュールと見つからなかったモジュール
        """
        worklist = Worklist()
        worklist.enqueue(self.oracle.scan(executable_path))

        start_time = time.time()
        progress = _Progress()
        passes = 0
        while worklist:
            worklist = self._run_pass(worklist, progress)
            passes += 1
        elapsed_seconds = time.time() - start_time

        return ResolutionResult(
            copied_files=progress.copied_files,
            present_files=progress.present_files,
            unresolved=progress.unresolved,
            passes=passes,
            elapsed_seconds=elapsed_seconds,
        )
