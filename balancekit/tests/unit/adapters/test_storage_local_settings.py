import json

import pytest

from balancekit.adapters.storage_local import StorageLocal
from balancekit.viewmodels.settings_vm import SettingsVM


def test_user_settings_round_trip(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path / "nested"))
    payload = {
        "balance_url": "http://localhost/balance",
        "api_key": "token",
        "request_timeout_s": 5,
        "retries": 0,
        "debug_logging": True,
    }

    storage.save_user_settings(payload)

    assert storage.load_user_settings() == payload


def test_missing_file_returns_none(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))

    assert storage.load_user_settings() is None
    assert not (tmp_path / "user_settings.json").exists()


def test_settings_vm_save_writes_file(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))
    vm = SettingsVM(on_save=storage.save_user_settings)

    vm.cmd_save()

    with (tmp_path / "user_settings.json").open("r", encoding="utf-8") as fh:
        assert json.load(fh) == vm.to_dict()


def test_non_object_settings_file_is_rejected(tmp_path):
    (tmp_path / "user_settings.json").write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        StorageLocal(root_dir=str(tmp_path)).load_user_settings()
