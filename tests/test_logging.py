from collections.abc import Iterator

import pytest
from loguru import logger

from build_instructions import Cargo, logging_utils


@pytest.fixture
def fresh_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setattr(logging_utils, "_CONFIGURED", None)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    yield
    logger.remove()
    logger.disable("build_instructions")


@pytest.mark.usefixtures("fresh_logging")
@pytest.mark.parametrize("profile", ["default", "rich"])
def test_logs_go_to_stderr_only(profile: logging_utils.LogProfile, capsys: pytest.CaptureFixture[str]) -> None:
    logging_utils.configure_logging(profile=profile, level="DEBUG")

    cargo = Cargo.captured()
    cargo.warning("teapot")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "instruction.emit name=warning" in captured.err
    assert cargo.captured_text() == "cargo:warning=teapot\n"


@pytest.mark.usefixtures("fresh_logging")
def test_default_level_hides_debug(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.delenv("BUILD_INSTRUCTIONS_LOG_LEVEL", raising=False)
    logging_utils.configure_logging()

    Cargo.captured().warning("quiet")
    assert capsys.readouterr().err == ""


@pytest.mark.usefixtures("fresh_logging")
def test_configure_is_idempotent_per_profile(capsys: pytest.CaptureFixture[str]) -> None:
    logging_utils.configure_logging(level="DEBUG")
    logging_utils.configure_logging(level="DEBUG")

    Cargo.captured().rustc_cfg("once")
    assert capsys.readouterr().err.count("instruction.emit name=rustc-cfg") == 1


@pytest.mark.usefixtures("fresh_logging")
def test_reconfigure_with_new_level_takes_effect(capsys: pytest.CaptureFixture[str]) -> None:
    logging_utils.configure_logging(level="DEBUG")
    logging_utils.configure_logging(level="WARNING")

    Cargo.captured().rustc_cfg("quiet")
    assert "instruction.emit" not in capsys.readouterr().err
