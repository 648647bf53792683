"""収集設定関連の処理"""

import dataclasses
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import TypeAdapter, ValidationError

from ..utility.path_utility import expand_paths, get_save_dir


class SettingError(Exception):
    """設定値の読み込みや検証に失敗したエラー"""

    pass


@dataclass(frozen=True)
class Setting:
    """依存収集の設定情報"""

    dependencies_path: Path  # Dependencies.exe のパス
    executable_path: Path  # 依存を収集する実行ファイル
    search_dirs: list[Path] = field(default_factory=list)  # DLL を探すディレクトリ
    include_pattern: str = ".*"  # 収集対象とするモジュール名の正規表現
    target_dir: Path | None = None  # コピー先。None なら実行ファイルのあるディレクトリ
    fail_fast: bool = False  # 見つからない DLL があった時点で中断するか否か

    def compiled_pattern(self) -> re.Pattern[str]:
        return re.compile(self.include_pattern)

    def resolved_target_dir(self) -> Path:
        """コピー先ディレクトリを取得する。"""
        if self.target_dir is not None:
            return self.target_dir
        return self.executable_path.parent


_setting_adapter = TypeAdapter(Setting)


USER_SETTING_PATH: Path = get_save_dir() / "setting.yml"


class SettingHandler:
    def __init__(self, setting_file_path: Path) -> None:
        """
        設定ファイルの管理
        Parameters
        ----------
        setting_file_path : Path
            設定ファイルのパス。存在しない場合はコマンドライン引数のみを用いる。
        """
        self.setting_file_path = setting_file_path

    def _read(self) -> dict[str, Any]:
        if not self.setting_file_path.is_file():
            return {}
        try:
            obj = yaml.safe_load(self.setting_file_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise SettingError(f"設定ファイルのパースに失敗しました: {e}") from e
        if obj is None:
            return {}
        if not isinstance(obj, dict):
            raise SettingError("設定ファイルの形式が不正です")
        return obj

    def load(self, overrides: dict[str, Any] | None = None) -> Setting:
        """
        設定値をファイルから読み込む。
        Parameters
        ----------
        overrides : dict[str, Any] | None
            ファイルの値を上書きする値。None の項目は無視する。
        """
        setting_dict = self._read()
        for key, value in (overrides or {}).items():
            if value is not None:
                setting_dict[key] = value

        try:
            setting = _setting_adapter.validate_python(setting_dict)
        except ValidationError as e:
            raise SettingError(f"設定値にミスがあります\n{e}") from e

        try:
            setting.compiled_pattern()
        except re.error as e:
            msg = f"include_pattern が正規表現として不正です: {setting.include_pattern}"
            raise SettingError(msg) from e

        return dataclasses.replace(
            setting,
            dependencies_path=setting.dependencies_path.expanduser(),
            executable_path=setting.executable_path.expanduser(),
            search_dirs=expand_paths(setting.search_dirs),
            target_dir=(
                setting.target_dir.expanduser()
                if setting.target_dir is not None
                else None
            ),
        )

    def save(self, setting: Setting) -> None:
        """設定値をファイルへ書き込む。"""
        setting_dict: dict[str, Any] = _setting_adapter.dump_python(
            setting, mode="json"
        )

        self.setting_file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.setting_file_path, mode="w", encoding="utf-8") as f:
            yaml.safe_dump(setting_dict, f)
