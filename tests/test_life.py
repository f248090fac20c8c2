import pytest

import life

GLIDER_RLE = "x = 3, y = 3\nbob$2bo$3o!\n"


def test_check_mode_agrees_on_named_pattern(capsys):
    assert life.main(['-P', 'blinker', '-S', '5', '5', '-I', '10', '--check']) == 0
    out = capsys.readouterr().out
    assert out.startswith('AC')
    assert 'Reference:' in out and 'Optimized:' in out


@pytest.mark.parametrize('storage', ['dense', 'sparse'])
@pytest.mark.parametrize('boundary', ['wrap', 'clip'])
def test_check_mode_on_random_grid(capsys, storage, boundary):
    argv = ['-S', '10', '14', '-I', '8', '--seed', '5', '--storage', storage, '-B', boundary, '--check']
    assert life.main(argv) == 0
    assert 'AC' in capsys.readouterr().out


def test_check_mode_reports_mismatch(capsys, monkeypatch):
    monkeypatch.setattr(life, 'step_ref', lambda grid, boundary: grid.with_cells([(0, 0)]))
    assert life.main(['-P', 'blinker', '-S', '5', '5', '--at', '1', '2', '-I', '10', '--check']) == 1
    out = capsys.readouterr().out
    assert 'WA' in out
    assert 'final result different' in out


def test_animation_from_rle_file(tmp_path, capsys):
    path = tmp_path / 'glider.rle'
    path.write_text(GLIDER_RLE)
    assert life.main(['-F', str(path), '-S', '10', '10', '-I', '3', '--interval', '0']) == 0
    out = capsys.readouterr().out
    assert 'Generation 2, population 5' in out
    assert 'Final population: 5' in out


def test_pattern_that_does_not_fit_is_a_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        life.main(['-P', 'gosper_glider_gun', '-S', '5', '5', '--check'])
    assert exc.value.code == 2
    assert 'does not fit' in capsys.readouterr().err


def test_missing_file_is_a_usage_error(tmp_path):
    with pytest.raises(SystemExit) as exc:
        life.main(['-F', str(tmp_path / 'missing.rle'), '--check'])
    assert exc.value.code == 2


def test_file_and_pattern_are_exclusive():
    with pytest.raises(SystemExit) as exc:
        life.main(['-F', 'x.rle', '-P', 'glider'])
    assert exc.value.code == 2


def test_negative_iterations_rejected():
    with pytest.raises(SystemExit) as exc:
        life.main(['-I', '-1', '--check'])
    assert exc.value.code == 2


def test_negative_interval_rejected(capsys):
    with pytest.raises(SystemExit) as exc:
        life.main(['-P', 'blinker', '-S', '5', '5', '-I', '3', '--interval', '-1'])
    assert exc.value.code == 2
    assert '--interval' in capsys.readouterr().err


def test_final_population_matches_last_frame(capsys):
    assert life.main(['-P', 'block', '-S', '6', '6', '-I', '2', '--interval', '0', '-B', 'clip']) == 0
    out = capsys.readouterr().out
    assert 'Generation 1, population 4' in out
    assert out.rstrip().endswith('Final population: 4')
