"""Integration test: run a full check over the legacy_app example tree."""

from pathlib import Path

from es_compat.checker import check_package, check_targets
from es_compat.config import CheckOptions
from es_compat.models import ClassificationState

LEGACY_APP = Path(__file__).parent.parent / "examples" / "legacy_app"

C = ClassificationState


def test_full_check_es5():
    assert LEGACY_APP.exists(), f"Example app not found at {LEGACY_APP}"
    lines: list[str] = []
    result = check_package(CheckOptions(es_version=5, resolve_path=LEGACY_APP), echo=lines.append)
    report = result.report

    assert result.root_name == "legacy-app"
    assert report.compatible == ["legacy-app", "es5-lib", "deep-lib"]
    assert report.non_source == ["styles-only"]
    assert [n.name for n in report.incompatible] == ["modern-lib", "peer-lib"]
    assert report.unreadable == ["cycle-a", "cycle-b", "meta-pkg", "missing-pkg"]
    assert report.passed is False

    # es5-lib is compatible, so its own dependencies are never looked at
    assert "never-installed" not in result.store

    assert lines[0] == "✅ legacy-app is ES5 compatible."
    assert lines[1].startswith("    ❓ cycle-a")
    assert lines[2].startswith("        ❓ cycle-b")


def test_without_peers_only_modern_lib_fails():
    result = check_package(CheckOptions(resolve_path=LEGACY_APP, include_peer=False))
    assert [n.name for n in result.report.incompatible] == ["modern-lib"]
    assert "peer-lib" not in result.store


def test_es2015_and_es2016():
    es2015 = check_package(CheckOptions(es_version=2015, resolve_path=LEGACY_APP))
    assert [n.name for n in es2015.report.incompatible] == ["peer-lib"]
    assert "modern-lib" in es2015.report.compatible

    es2016 = check_package(CheckOptions(es_version=2016, resolve_path=LEGACY_APP))
    assert es2016.passed is True


def test_named_root_package():
    result = check_package(CheckOptions(package_name="meta-pkg", resolve_path=LEGACY_APP))
    assert result.root_name == "meta-pkg"
    assert result.store.get("meta-pkg") is C.UNREADABLE
    assert result.store.get("modern-lib") is C.INCOMPATIBLE
    assert result.store.get("deep-lib") is C.COMPATIBLE


def test_runs_are_deterministic():
    a = check_package(CheckOptions(resolve_path=LEGACY_APP)).report
    b = check_package(CheckOptions(resolve_path=LEGACY_APP)).report
    assert a == b


def test_target_directory_mode():
    result = check_targets(LEGACY_APP / "node_modules" / "modern-lib", CheckOptions())
    assert [n.name for n in result.report.incompatible] == ["index.js"]


def test_target_file_mode():
    target = LEGACY_APP / "node_modules" / "es5-lib" / "lib" / "index.js"
    result = check_targets(target, CheckOptions())
    assert result.report.compatible == [str(target)]
