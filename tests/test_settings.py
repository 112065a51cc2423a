# ============================================================
# Tests for DetectionConfig, SettingsManager and ConfigStore
# ============================================================

import json
import logging
import threading

import pytest

from campaign_core.config import DEFAULT_CONFIG, DetectionConfig
from campaign_core.settings import OVERRIDABLE_FIELDS, ConfigStore, SettingsManager


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "detection_settings.json"


class TestDetectionConfig:

    def test_overrides_are_frozen(self):
        config = DEFAULT_CONFIG.with_overrides(money_keywords=["cuan"], leet_map={"4": "a"})

        assert config.money_keywords == ("cuan",)
        with pytest.raises(TypeError):
            config.leet_map["4"] = "x"

    def test_default_is_untouched(self):
        DEFAULT_CONFIG.with_overrides(campaign_threshold=70)
        assert DEFAULT_CONFIG.campaign_threshold == 50

    def test_unknown_field(self):
        with pytest.raises(TypeError):
            DEFAULT_CONFIG.with_overrides(not_a_field=1)

    def test_field_names(self):
        names = DetectionConfig.field_names()
        assert names[0] == "fancy_ranges"
        assert "campaign_threshold" in names

    def test_overridable_fields(self):
        assert "campaign_threshold" in OVERRIDABLE_FIELDS
        assert "money_keywords" in OVERRIDABLE_FIELDS
        assert "fancy_ranges" not in OVERRIDABLE_FIELDS
        assert "legitimacy_reductions" not in OVERRIDABLE_FIELDS


class TestSettingsManager:

    def test_missing_file_returns_base(self, settings_path):
        assert SettingsManager(str(settings_path)).load() is DEFAULT_CONFIG

    def test_save_and_load(self, settings_path):
        manager = SettingsManager(str(settings_path))
        config = DEFAULT_CONFIG.with_overrides(campaign_threshold=65, urgency_keywords=["buruan", "sekarang"])

        assert manager.save(config) is True
        loaded = manager.load()

        assert loaded.campaign_threshold == 65
        assert loaded.urgency_keywords == ("buruan", "sekarang")
        assert loaded.money_keywords == DEFAULT_CONFIG.money_keywords

    def test_only_changed_values_are_written(self, settings_path):
        manager = SettingsManager(str(settings_path))
        manager.save(DEFAULT_CONFIG.with_overrides(pass1_threshold=0.45))

        data = json.loads(settings_path.read_text(encoding="utf-8"))
        assert data == {"pass1_threshold": 0.45}

    def test_invalid_json_falls_back(self, settings_path, caplog):
        settings_path.write_text("{not json", encoding="utf-8")

        with caplog.at_level(logging.ERROR):
            config = SettingsManager(str(settings_path)).load()

        assert config is DEFAULT_CONFIG
        assert any("Failed to parse settings file" in record.message for record in caplog.records)

    def test_non_object_falls_back(self, settings_path):
        settings_path.write_text("[1, 2, 3]", encoding="utf-8")
        assert SettingsManager(str(settings_path)).load() is DEFAULT_CONFIG

    def test_bad_values_are_skipped(self, settings_path, caplog):
        settings_path.write_text(json.dumps({
            "campaign_threshold": "high",
            "money_keywords": ["cuan", 5],
            "unknown_setting": True,
            "merge_threshold": 0.35,
            "max_fuzzy_distance": 1,
        }), encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            config = SettingsManager(str(settings_path)).load()

        assert config.campaign_threshold == 50
        assert config.money_keywords == DEFAULT_CONFIG.money_keywords
        assert config.merge_threshold == 0.35
        assert config.max_fuzzy_distance == 1
        assert any("unknown_setting" in record.message for record in caplog.records)

    def test_integer_accepted_for_float_field(self):
        overrides = SettingsManager.filter_overrides({"pass1_threshold": 1, "caps_ratio_threshold": True})
        assert overrides == {"pass1_threshold": 1}

    def test_save_failure(self, tmp_path):
        manager = SettingsManager(str(tmp_path / "missing_dir" / "settings.json"))
        assert manager.save(DEFAULT_CONFIG) is False


class TestConfigStore:

    def test_defaults(self):
        assert ConfigStore().current is DEFAULT_CONFIG

    def test_replace(self):
        store = ConfigStore()
        config = DEFAULT_CONFIG.with_overrides(campaign_threshold=60)

        store.replace(config)

        assert store.current is config

    def test_reload_from_disk(self, settings_path):
        settings_path.write_text(json.dumps({"campaign_threshold": 75}), encoding="utf-8")
        store = ConfigStore(settings_manager=SettingsManager(str(settings_path)))

        config = store.reload()

        assert config.campaign_threshold == 75
        assert store.current is config

    def test_readers_see_whole_configurations(self):
        store = ConfigStore()
        configs = [DEFAULT_CONFIG.with_overrides(campaign_threshold=n, pass1_threshold=n / 100) for n in range(40, 60)]
        seen = []

        def reader():
            for _ in range(200):
                snapshot = store.current
                seen.append((snapshot.campaign_threshold, snapshot.pass1_threshold))

        thread = threading.Thread(target=reader)
        thread.start()
        for config in configs:
            store.replace(config)
        thread.join()

        assert all(threshold == 50 or pass1 == threshold / 100 for threshold, pass1 in seen)
