import errno
from pathlib import Path

import pytest

from build_instructions import Cargo, PathBehavior, PathNotFoundError
from build_instructions.config import Settings
from build_instructions.raw import Cargo as RawCargo


def test_rerun_if_changed_always_emits_for_missing_path(tmp_path: Path) -> None:
    missing = tmp_path / "missing.txt"
    cargo = Cargo.captured()
    cargo.rerun_if_changed(missing, PathBehavior.ALWAYS)
    assert cargo.captured_text() == f"cargo:rerun-if-changed={missing}\n"


def test_rerun_if_changed_defaults_to_always() -> None:
    cargo = Cargo.captured()
    cargo.rerun_if_changed("does/not/exist.txt")
    assert cargo.captured_text() == "cargo:rerun-if-changed=does/not/exist.txt\n"


def test_rerun_if_changed_only_if_exists(tmp_path: Path) -> None:
    present = tmp_path / "present.txt"
    present.write_text("x", encoding="utf-8")
    missing = tmp_path / "missing.txt"

    cargo = Cargo.captured()
    cargo.rerun_if_changed(missing, PathBehavior.ONLY_IF_EXISTS)
    assert cargo.captured_text() == ""

    cargo.rerun_if_changed(present, PathBehavior.ONLY_IF_EXISTS)
    assert cargo.captured_text() == f"cargo:rerun-if-changed={present}\n"


def test_rerun_if_changed_must_exist(tmp_path: Path) -> None:
    cargo = Cargo.captured()
    cargo.rerun_if_changed(tmp_path, PathBehavior.MUST_EXIST)
    assert cargo.captured_text() == f"cargo:rerun-if-changed={tmp_path}\n"


def test_rerun_if_changed_must_exist_fails_without_output(tmp_path: Path) -> None:
    missing = tmp_path / "missing.txt"
    cargo = Cargo.captured()

    with pytest.raises(PathNotFoundError) as exc_info:
        cargo.rerun_if_changed(missing, PathBehavior.MUST_EXIST)

    assert isinstance(exc_info.value, FileNotFoundError)
    assert exc_info.value.errno == errno.ENOENT
    assert exc_info.value.path == str(missing)
    assert cargo.captured_text() == ""


def test_rerun_if_changed_accepts_behavior_names(tmp_path: Path) -> None:
    cargo = Cargo.captured()
    cargo.rerun_if_changed(tmp_path / "missing", "only-if-exists")  # type: ignore[arg-type]
    assert cargo.captured_text() == ""


def test_pass_through_instructions_match_raw() -> None:
    cargo = Cargo.captured()
    cargo.rerun_if_env_changed("CC")
    cargo.rustc_link_arg("-static")
    cargo.rustc_link_arg_bin("cli", "-static")
    cargo.rustc_link_arg_bins("-static")
    cargo.rustc_link_arg_tests("-static")
    cargo.rustc_link_arg_examples("-static")
    cargo.rustc_link_arg_benches("-static")
    cargo.rustc_link_lib("static:+whole-archive=mylib")
    cargo.rustc_link_search(None, "mylib")
    cargo.rustc_link_search("crate", "mylib")
    cargo.rustc_flags("-Clto")
    cargo.rustc_cfg("asdf", "hjkl")
    cargo.rustc_cfg("asdf")
    cargo.rustc_env("EDITOR", "vim")
    cargo.rustc_cdylib_link_arg("-pie")
    cargo.warning("teapot")
    cargo.metadata("asdf", "hjkl")

    assert cargo.captured_text() == (
        "cargo:rerun-if-env-changed=CC\n"
        "cargo:rustc-link-arg=-static\n"
        "cargo:rustc-link-arg-bin=cli=-static\n"
        "cargo:rustc-link-arg-bins=-static\n"
        "cargo:rustc-link-arg-tests=-static\n"
        "cargo:rustc-link-arg-examples=-static\n"
        "cargo:rustc-link-arg-benches=-static\n"
        "cargo:rustc-link-lib=static:+whole-archive=mylib\n"
        "cargo:rustc-link-search=mylib\n"
        "cargo:rustc-link-search=crate=mylib\n"
        "cargo:rustc-flags=-Clto\n"
        "cargo:rustc-cfg=asdf=hjkl\n"
        "cargo:rustc-cfg=asdf\n"
        "cargo:rustc-env=EDITOR=vim\n"
        "cargo:rustc-cdylib-link-arg=-pie\n"
        "cargo:warning=teapot\n"
        "cargo:asdf=hjkl\n"
    )


def test_raw_access_shares_output() -> None:
    inner = RawCargo.captured()
    cargo = Cargo.from_raw(inner)
    cargo.warning("a")
    cargo.raw.warning("b")

    assert cargo.into_inner() is inner
    assert inner.captured_text() == "cargo:warning=a\ncargo:warning=b\n"


def test_from_settings_uses_configured_prefix(capsys: pytest.CaptureFixture[str]) -> None:
    cargo = Cargo.from_settings(Settings(prefix="cargo::"))
    cargo.rustc_cfg("fast")
    assert capsys.readouterr().out == "cargo::rustc-cfg=fast\n"
