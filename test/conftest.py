from pathlib import Path

import pytest

from test.utility import BinaryLayout, make_binary


@pytest.fixture
def layout(tmp_path: Path) -> BinaryLayout:
    """
    実行ファイルを置くディレクトリと DLL 検索ディレクトリを用意する fixture。

    Examples
    --------
    >>> def test_foo(layout: BinaryLayout):
    >>>     make_binary(layout.search_dir / "vtkCommon.dll")
    """
    target_dir = tmp_path / "bin"
    search_dir = tmp_path / "sdk"
    search_dir.mkdir()
    executable_path = make_binary(target_dir / "app.exe", b"app")
    return BinaryLayout(executable_path, target_dir, search_dir)
