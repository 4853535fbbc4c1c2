import pytest

import main


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        main.load_config(tmp_path / "missing.yaml")


def test_load_config_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert main.load_config(path) == {}


def test_main_exits_on_missing_config(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main.main(["--config", str(tmp_path / "missing.yaml")])
    assert exc.value.code == 1
    assert "Config file not found" in capsys.readouterr().err


def test_main_runs_games_from_config(tmp_path, capsys):
    path = tmp_path / "game.yaml"
    path.write_text("board_width: 10\nboard_height: 20\nrandomizer: bag\nseed: 4\ngames: 2\n")
    main.main(["--config", str(path), "--mode", "random", "--max-ticks", "30"])
    out = capsys.readouterr().out
    assert "Game 2/2" in out


def test_main_reports_bad_randomizer(tmp_path, capsys):
    path = tmp_path / "game.yaml"
    path.write_text("randomizer: shuffle\n")
    with pytest.raises(SystemExit) as exc:
        main.main(["--config", str(path), "--max-ticks", "5"])
    assert exc.value.code == 1
    assert "Unknown randomizer" in capsys.readouterr().err
