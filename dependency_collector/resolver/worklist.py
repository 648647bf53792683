"""依存解決の待ち行列"""

from pathlib import Path


class Worklist:
    """
    未処理のモジュールの集まり

    一度でも追加されたモジュール名は記録され、処理済みになった後も再追加されない。
    これにより解析ツールの呼び出しはモジュールごとに高々 1 回となり、探索は必ず停止する。
    """

    def __init__(self) -> None:
        self._pending: dict[str, Path | None] = {}
        self._seen: set[str] = set()

    def __len__(self) -> int:
        return len(self._pending)

    def __bool__(self) -> bool:
        return bool(self._pending)

    def enqueue(self, dependencies: dict[str, Path | None]) -> list[str]:
        """
        未追加のモジュールを待ち行列へ追加する。
        Returns
        -------
        added : list[str]
            実際に追加されたモジュール名
        """
        added = []
        for module_name, file_path in dependencies.items():
            if module_name in self._seen:
                continue
            self._seen.add(module_name)
            self._pending[module_name] = file_path
            added.append(module_name)
        return added

    def remove(self, module_name: str) -> None:
        """処理済みのモジュールを取り除く。"""
        del self._pending[module_name]

    def snapshot(self) -> list[tuple[str, Path | None]]:
        """現時点の未処理モジュールを追加順に返す。"""
        return list(self._pending.items())
