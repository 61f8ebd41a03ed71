import pytest

from touchpad_relay.errors import MalformedEvent
from touchpad_relay.settings import SettingsStore


def test_defaults():
    assert SettingsStore().get() == {'sensitivity': 2, 'scrollSensitivity': 1, 'smoothing': True}


def test_initial_values_override_defaults():
    store = SettingsStore({'smoothing': False})
    assert store.get() == {'sensitivity': 2, 'scrollSensitivity': 1, 'smoothing': False}
    assert store.smoothing is False


def test_disjoint_updates_compose(settings):
    settings.update({'sensitivity': 3})
    result = settings.update({'smoothing': False})
    assert result == {'sensitivity': 3, 'scrollSensitivity': 1, 'smoothing': False}
    assert settings.get() == result


def test_update_returns_full_settings(settings):
    assert settings.update({'scrollSensitivity': 2}) == {'sensitivity': 2, 'scrollSensitivity': 2, 'smoothing': True}


def test_last_write_wins(settings):
    settings.update({'sensitivity': 1.5})
    settings.update({'sensitivity': 3.5})
    assert settings.sensitivity == 3.5


def test_out_of_range_values_are_accepted_as_is(settings):
    settings.update({'sensitivity': 10})
    assert settings.sensitivity == 10


def test_get_returns_a_copy(settings):
    snapshot = settings.get()
    snapshot['sensitivity'] = 4
    assert settings.sensitivity == 2


@pytest.mark.parametrize('partial', [None, 3, 'fast', [('sensitivity', 3)]])
def test_update_rejects_non_objects(settings, partial):
    with pytest.raises(MalformedEvent):
        settings.update(partial)
    assert settings.get() == SettingsStore().get()
