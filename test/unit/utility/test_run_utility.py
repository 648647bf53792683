import pytest

from dependency_collector.utility.run_utility import decide_boolean_from_env

ENV_NAME = "DEPENDENCY_COLLECTOR_TEST_ENV"


@pytest.mark.parametrize(
    "value,default,expected",
    [
        ("1", False, True),
        ("0", True, False),
        ("", True, True),
        ("", False, False),
    ],
)
def test_decide_boolean_from_env(
    monkeypatch: pytest.MonkeyPatch, value: str, default: bool, expected: bool
) -> None:
    monkeypatch.setenv(ENV_NAME, value)
    assert decide_boolean_from_env(ENV_NAME, default) == expected


def test_decide_boolean_from_env_not_set(monkeypatch: pytest.MonkeyPatch) -> None:
    """環境変数が存在しなければ既定値を返す。"""
    monkeypatch.delenv(ENV_NAME, raising=False)
    assert decide_boolean_from_env(ENV_NAME) is False


def test_decide_boolean_from_env_invalid(monkeypatch: pytest.MonkeyPatch) -> None:
    """不正な値は警告を出して既定値を返す。"""
    monkeypatch.setenv(ENV_NAME, "yes")
    with pytest.warns(UserWarning, match="Invalid environment variable value"):
        assert decide_boolean_from_env(ENV_NAME) is False
