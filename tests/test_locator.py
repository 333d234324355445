from __future__ import annotations

from pathlib import Path

from padserver.config.locator import DEFAULT_ROOT, locate_settings_file


def test_default_filename_under_root(tmp_path: Path) -> None:
    assert locate_settings_file(tmp_path) == tmp_path / "settings.json"


def test_override_is_relative_to_root(tmp_path: Path) -> None:
    path = locate_settings_file(tmp_path, "conf/custom.json")

    assert path == tmp_path / "conf" / "custom.json"


def test_override_is_normalized(tmp_path: Path) -> None:
    path = locate_settings_file(tmp_path / "app", "../shared/settings.json")

    assert path == tmp_path / "shared" / "settings.json"


def test_absolute_override_is_used_as_is(tmp_path: Path) -> None:
    target = tmp_path / "elsewhere" / "settings.json"

    assert locate_settings_file("/opt/padserver", str(target)) == target


def test_locating_does_not_touch_the_filesystem(tmp_path: Path) -> None:
    root = tmp_path / "does" / "not" / "exist"

    assert locate_settings_file(root) == root / "settings.json"
    assert not root.exists()


def test_default_root_contains_the_package() -> None:
    assert (DEFAULT_ROOT / "padserver" / "__init__.py").is_file()
