from __future__ import annotations

import logging
import threading

import pytest

from sailtact.settings import AdvisorSettings, SettingsError, SettingsStore


def test_defaults_are_valid() -> None:
    settings = AdvisorSettings().validate()

    assert settings.as_dict() == {
        "threshold_mps": 0.1,
        "eval_interval_s": 30.0,
        "preferred_turn_angle_deg": 90.0,
        "bin_width_deg": 5.0,
        "max_samples_per_bin": 50,
        "twa_positive_starboard": True,
        "voice_announce": False,
        "min_fix_interval_s": 0.8,
    }


@pytest.mark.parametrize(
    "changes",
    [
        {"threshold_mps": 2.5},
        {"eval_interval_s": 5.0},
        {"preferred_turn_angle_deg": 181.0},
        {"bin_width_deg": 0.5},
        {"max_samples_per_bin": 501},
        {"max_samples_per_bin": 10.5},
        {"threshold_mps": "fast"},
        {"threshold_mps": float("nan")},
        {"voice_announce": "yes"},
        {"twa_positive_starboard": 1},
        {"bogus": 1},
    ],
)
def test_with_changes_rejects_invalid_values(changes: dict[str, object]) -> None:
    with pytest.raises(SettingsError):
        AdvisorSettings().with_changes(**changes)


def test_with_changes_returns_new_snapshot() -> None:
    original = AdvisorSettings()
    updated = original.with_changes(threshold_mps=0.5, preferred_turn_angle_deg=100.0)

    assert original.threshold_mps == 0.1
    assert updated.threshold_mps == 0.5
    assert updated.preferred_turn_angle_deg == 100.0


def test_from_config_without_section_uses_defaults() -> None:
    assert AdvisorSettings.from_config({}) == AdvisorSettings()
    assert AdvisorSettings.from_config(None) == AdvisorSettings()
    assert AdvisorSettings.from_config({"advisor": "nope"}) == AdvisorSettings()


def test_from_config_coerces_values() -> None:
    settings = AdvisorSettings.from_config(
        {
            "advisor": {
                "threshold_mps": "0.25",
                "eval_interval_s": 15,
                "max_samples_per_bin": 99.6,
                "twa_positive_starboard": "off",
                "voice_announce": True,
            }
        }
    )

    assert settings.threshold_mps == 0.25
    assert settings.eval_interval_s == 15.0
    assert settings.max_samples_per_bin == 100
    assert settings.twa_positive_starboard is False
    assert settings.voice_announce is True


def test_from_config_clamps_and_warns(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="sailtact")

    settings = AdvisorSettings.from_config(
        {"advisor": {"threshold_mps": 9.0, "bin_width_deg": 0.0, "colour": "red"}}
    )

    assert settings.threshold_mps == 2.0
    assert settings.bin_width_deg == 1.0
    events = [getattr(record, "event", None) for record in caplog.records]
    assert events.count("settings.clamped") == 2
    assert "settings.unknown_keys" in events


def test_from_config_replaces_invalid_values(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="sailtact")

    settings = AdvisorSettings.from_config(
        {"advisor": {"eval_interval_s": "soon", "voice_announce": "maybe", "threshold_mps": True}}
    )

    assert settings == AdvisorSettings()
    invalid = [r for r in caplog.records if getattr(r, "event", None) == "settings.invalid"]
    assert {record.setting for record in invalid} == {
        "eval_interval_s",
        "voice_announce",
        "threshold_mps",
    }


def test_store_notifies_listeners_with_old_and_new(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="sailtact")
    store = SettingsStore()
    seen: list[tuple[AdvisorSettings, AdvisorSettings]] = []
    store.add_listener(lambda old, new: seen.append((old, new)))

    updated = store.update(threshold_mps=0.4)

    assert store() is updated
    assert store.get().threshold_mps == 0.4
    assert seen == [(AdvisorSettings(), updated)]
    assert any(getattr(r, "event", None) == "settings.updated" for r in caplog.records)


def test_store_skips_listeners_for_no_op_update() -> None:
    store = SettingsStore()
    seen: list[object] = []
    store.add_listener(lambda old, new: seen.append(new))

    store.update(threshold_mps=0.1)

    assert seen == []


def test_removed_listener_is_not_called() -> None:
    store = SettingsStore()
    seen: list[object] = []

    def _listener(old: AdvisorSettings, new: AdvisorSettings) -> None:
        seen.append(new)

    store.add_listener(_listener)
    store.remove_listener(_listener)
    store.remove_listener(_listener)
    store.update(threshold_mps=1.0)

    assert seen == []


def test_invalid_initial_settings_rejected() -> None:
    with pytest.raises(SettingsError):
        SettingsStore(AdvisorSettings(threshold_mps=-1.0))


def test_concurrent_updates_keep_snapshots_consistent() -> None:
    store = SettingsStore()
    barrier = threading.Barrier(3)
    observed: list[AdvisorSettings] = []

    def _update(threshold: float, angle: float) -> None:
        barrier.wait()
        for _ in range(100):
            store.update(threshold_mps=threshold, preferred_turn_angle_deg=angle)

    def _read() -> None:
        barrier.wait()
        for _ in range(300):
            observed.append(store.get())

    threads = [
        threading.Thread(target=_update, args=(0.5, 60.0)),
        threading.Thread(target=_update, args=(1.5, 120.0)),
        threading.Thread(target=_read),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10.0)

    pairs = {(item.threshold_mps, item.preferred_turn_angle_deg) for item in observed}
    assert pairs <= {(0.1, 90.0), (0.5, 60.0), (1.5, 120.0)}
