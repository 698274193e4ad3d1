import pytest

from backend.core import config


@pytest.mark.parametrize(('raw', 'expected'), [(None, True), ('1', True), (' Yes ', True), ('off', False), ('', False)])
def test_get_bool_parses_common_spellings(raw, expected: bool) -> None:
    assert config._get_bool(raw, default=True) is expected


def test_get_list_splits_and_strips() -> None:
    assert config._get_list(' http://a.test , ,http://b.test', default=['*']) == ['http://a.test', 'http://b.test']
    assert config._get_list(None, default=['*']) == ['*']


def test_validate_runtime_config_accepts_defaults() -> None:
    config.validate_runtime_config()


def test_validate_runtime_config_rejects_unknown_timezone(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'SCHEDULING_TIMEZONE', 'Mars/Olympus_Mons')

    with pytest.raises(RuntimeError):
        config.validate_runtime_config()


def test_validate_runtime_config_rejects_non_positive_default_duration(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'DEFAULT_SLOT_DURATION_MINUTES', 0)

    with pytest.raises(RuntimeError):
        config.validate_runtime_config()
