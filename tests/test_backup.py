import os

import pytest

from sshdeck.atomic_io import atomic_write_text
from sshdeck.backup import backup_config, backup_path_for


def test_backup_copies_content(tmp_path):
    config = tmp_path / "config"
    config.write_text("Host a\n")

    path = backup_config(str(config))

    assert path == str(config) + ".backup"
    assert open(path).read() == "Host a\n"


def test_backup_keeps_a_single_generation(tmp_path):
    config = tmp_path / "config"
    config.write_text("first\n")
    backup_config(str(config))
    config.write_text("second\n")
    backup_config(str(config))

    assert open(backup_path_for(str(config))).read() == "second\n"
    assert sorted(os.listdir(tmp_path)) == ["config", "config.backup"]


def test_backup_of_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        backup_config(str(tmp_path / "missing"))


def test_atomic_write_replaces_content_without_leftovers(tmp_path):
    target = tmp_path / "config"
    target.write_text("old\n")

    atomic_write_text(str(target), "new\n")

    assert target.read_text() == "new\n"
    assert os.listdir(tmp_path) == ["config"]
    assert oct(os.stat(target).st_mode & 0o777) == oct(0o600)
