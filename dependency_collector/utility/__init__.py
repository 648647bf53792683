from .path_utility import expand_paths, get_save_dir
from .run_utility import decide_boolean_from_env

__all__ = [
    "expand_paths",
    "get_save_dir",
    "decide_boolean_from_env",
]
