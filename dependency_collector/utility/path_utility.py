"""パスに関する utility"""

from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "dependency-collector"


def get_save_dir() -> Path:
    """設定ファイルの保存先ディレクトリを指すパスを取得する。"""
    return Path(user_data_dir(APP_NAME))


def expand_paths(paths: list[Path]) -> list[Path]:
    """`~` を含むパスをホームディレクトリで展開する。"""
    return [path.expanduser() for path in paths]
