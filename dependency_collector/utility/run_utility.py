"""起動時の環境に関する utility"""

import os
import warnings


def decide_boolean_from_env(env_name: str, default: bool = False) -> bool:
    """
    環境変数からbool値を返す。

    * 環境変数が"1"ならTrueを、"0"ならFalseを返す
    * 空白か存在しないなら`default`を返す
    * それ以外はwarningを出して`default`を返す
    """
    env = os.getenv(env_name, default="")
    if env == "1":
        return True
    if env == "0":
        return False
    if env != "":
        warnings.warn(
            f"Invalid environment variable value: {env_name}={env}",
            stacklevel=2,
        )
    return default
