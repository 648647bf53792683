import argparse
import math
import sys
from io import TextIOWrapper
from pathlib import Path

from loguru import logger

from dependency_collector.oracle.oracle import (
    DependenciesOracle,
    OracleInvocationError,
)
from dependency_collector.resolver.resolver import (
    DependencyResolver,
    UnresolvedDependencyError,
)
from dependency_collector.setting.setting_manager import (
    USER_SETTING_PATH,
    Setting,
    SettingError,
    SettingHandler,
)
from dependency_collector.utility.run_utility import decide_boolean_from_env

VERBOSE_ENV_NAME = "DEPENDENCY_COLLECTOR_VERBOSE"


def set_output_utf8() -> None:
    """標準出力と標準エラー出力の出力形式を UTF-8 ベースに切り替える"""

    # NOTE: for 文で回せないため関数内関数で実装している
    def _prepare_utf8_stdio(stdio: TextIOWrapper) -> TextIOWrapper:
        """UTF-8 ベースの標準入出力インターフェイスを用意する"""
        if isinstance(stdio, TextIOWrapper):
            stdio.reconfigure(encoding="utf-8", errors="backslashreplace")
        return stdio

    if sys.stdout is not None:
        sys.stdout = _prepare_utf8_stdio(sys.stdout)  # type: ignore[arg-type]
    if sys.stderr is not None:
        sys.stderr = _prepare_utf8_stdio(sys.stderr)  # type: ignore[arg-type]


def setup_logger(verbose: bool) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="<level>{level}</level>: {message}",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="実行ファイルが推移的に依存する DLL を検索ディレクトリから収集し、実行ファイルの隣へコピーします。"
    )
    parser.add_argument(
        "executable_path",
        type=Path,
        nargs="?",
        default=None,
        help="依存を収集する実行ファイル。設定ファイルの executable_path を上書きします。",
    )
    parser.add_argument(
        "--dependencies_path",
        type=Path,
        default=None,
        help="Dependencies.exe のパス。",
    )
    parser.add_argument(
        "--search_dir",
        type=Path,
        action="append",
        default=None,
        help="不足している DLL を探すディレクトリ。複数回指定でき、先に指定したものが優先されます。",
    )
    parser.add_argument(
        "--include_pattern",
        type=str,
        default=None,
        help="収集対象とするモジュール名の正規表現。例: ^vtk",
    )
    parser.add_argument(
        "--target_dir",
        type=Path,
        default=None,
        help="DLL のコピー先。指定しない場合は実行ファイルのあるディレクトリになります。",
    )
    parser.add_argument(
        "--setting_file",
        type=Path,
        default=USER_SETTING_PATH,
        help="設定ファイルのパス。コマンドライン引数は設定ファイルの値より優先されます。",
    )
    parser.add_argument(
        "--fail_fast",
        action="store_true",
        default=None,
        help="見つからない DLL があった時点で収集を中断します。",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help=f"解析の詳細を出力します。環境変数 {VERBOSE_ENV_NAME}=1 でも有効になります。",
    )
    parser.add_argument(
        "--output_log_utf8",
        action="store_true",
        help="ログ出力をUTF-8でおこないます。",
    )
    return parser


def round_seconds(seconds: float) -> int:
    """経過時間を秒単位に四捨五入する。"""
    return math.floor(seconds + 0.5)


def check_directories(setting: Setting) -> bool:
    """検索ディレクトリとコピー先が存在するかを確認する。"""
    result = True
    for directory in [*setting.search_dirs, setting.resolved_target_dir()]:
        if not directory.is_dir():
            logger.error(f"could not find the directory: {directory}")
            result = False
    return result


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.output_log_utf8:
        set_output_utf8()
    setup_logger(args.verbose or decide_boolean_from_env(VERBOSE_ENV_NAME))

    overrides = {
        "executable_path": args.executable_path,
        "dependencies_path": args.dependencies_path,
        "search_dirs": args.search_dir,
        "include_pattern": args.include_pattern,
        "target_dir": args.target_dir,
        "fail_fast": args.fail_fast,
    }
    try:
        setting = SettingHandler(args.setting_file).load(overrides)
    except SettingError as e:
        logger.error(str(e))
        return 1

    if not check_directories(setting):
        return 1

    oracle = DependenciesOracle(setting.dependencies_path, setting.compiled_pattern())
    resolver = DependencyResolver(
        oracle,
        setting.search_dirs,
        setting.resolved_target_dir(),
        fail_fast=setting.fail_fast,
    )

    try:
        result = resolver.resolve(setting.executable_path)
        logger.info(f"Cost time {round_seconds(result.elapsed_seconds)} sec")
        result.raise_for_unresolved()
    except (OracleInvocationError, FileNotFoundError, UnresolvedDependencyError) as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
