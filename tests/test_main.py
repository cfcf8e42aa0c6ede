import cv2
import pytest

import areawatch.main as cli
from areawatch.controllers.vision import VisionController

from helpers import ArrayCapture, noise


@pytest.fixture
def fake_screen(monkeypatch):
    img = noise((120, 160, 3), seed=11)
    monkeypatch.setattr(cli, "VisionController", lambda: VisionController(capture=ArrayCapture(img)))
    return img


def run(tmp_path, *args):
    return cli.main(["--config", str(tmp_path / "config.ini"), "--log-level", "WARNING", *args])


def test_wait_found(tmp_path, fake_screen, restore_root_logger, capsys):
    tpl = tmp_path / "tpl.png"
    cv2.imwrite(str(tpl), fake_screen[20:40, 30:60])
    assert run(tmp_path, "wait", str(tpl), "--region", "10", "10", "140", "100", "--timeout", "500") == 0
    assert "(30, 20, 30, 20)" in capsys.readouterr().out


def test_wait_not_found(tmp_path, fake_screen, restore_root_logger, capsys):
    tpl = tmp_path / "other.png"
    cv2.imwrite(str(tpl), noise((20, 20, 3), seed=12))
    assert run(tmp_path, "wait", str(tpl), "--region", "0", "0", "160", "120", "--timeout", "30") == 1
    assert "not found" in capsys.readouterr().out


def test_wait_vanish(tmp_path, fake_screen, restore_root_logger, capsys):
    tpl = tmp_path / "other.png"
    cv2.imwrite(str(tpl), noise((20, 20, 3), seed=13))
    assert run(tmp_path, "wait", str(tpl), "--region", "0", "0", "160", "120", "--vanish") == 0
    assert "vanished" in capsys.readouterr().out


def test_missing_template(tmp_path, fake_screen, restore_root_logger):
    assert run(tmp_path, "wait", str(tmp_path / "nope.png"), "--region", "0", "0", "10", "10") == 2


def test_negative_count_is_rejected_by_parser(tmp_path, fake_screen, restore_root_logger, capsys):
    tpl = tmp_path / "tpl.png"
    cv2.imwrite(str(tpl), fake_screen[0:10, 0:10])
    with pytest.raises(SystemExit) as exc:
        run(tmp_path, "wait", str(tpl), "--count", "-1")
    assert exc.value.code == 2
    assert "must be >= 0" in capsys.readouterr().err
