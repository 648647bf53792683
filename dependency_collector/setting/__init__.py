from .setting_manager import USER_SETTING_PATH, Setting, SettingError, SettingHandler

__all__ = [
    "USER_SETTING_PATH",
    "Setting",
    "SettingError",
    "SettingHandler",
]
