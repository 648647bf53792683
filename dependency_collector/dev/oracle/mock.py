"""DependencyOracle のモック"""

import re
from pathlib import Path

from ...oracle.oracle import filter_dependencies


class MockDependencyOracle:
    """
    `DependenciesOracle` Mock

    ファイル名ごとの依存表を元に解析結果を返す。呼び出されたパスは `scanned_paths` に記録される。
    """

    def __init__(
        self,
        dependency_table: dict[str, dict[str, Path | None]],
        include_pattern: re.Pattern[str] | None = None,
    ) -> None:
        self.dependency_table = dependency_table
        self.include_pattern = include_pattern or re.compile(".*")
        self.scanned_paths: list[Path] = []

    def scan(self, file_path: Path) -> dict[str, Path | None]:
        if not file_path.exists():
            raise FileNotFoundError(f"ファイルが見つかりません: {file_path}")
        self.scanned_paths.append(file_path)
        dependencies = dict(self.dependency_table.get(file_path.name, {}))
        return filter_dependencies(dependencies, self.include_pattern)

    def scan_count(self, module_name: str) -> int:
        """指定ファイル名のモジュールが解析された回数を返す。"""
        return len([path for path in self.scanned_paths if path.name == module_name])
