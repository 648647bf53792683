"""
Dependencies の JSON 出力を表すモデル（データ構造）

`Dependencies.exe -json -depth 1 -chain <file>` が出力する文書のうち、
依存解決に必要な部分のみを定義する。未定義のフィールドは無視される。
"""

from pydantic import BaseModel, Field


class DependencyNode(BaseModel):
    """
    依存ツリーのノード（実行ファイルあるいは DLL）
    """

    module_name: str = Field(alias="ModuleName", description="モジュール名")
    file_path: str | None = Field(
        default=None,
        alias="Filepath",
        description="解決済みのファイルパス。見つからなかった場合は空",
    )
    dependencies: list["DependencyNode"] | None = Field(
        default=None, alias="Dependencies", description="直接依存するモジュール"
    )


class DependencyReport(BaseModel):
    """
    Dependencies の解析結果
    """

    root: DependencyNode = Field(alias="Root", description="解析対象のファイル")
