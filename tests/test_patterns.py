import pytest

from conway import DenseGrid, SparseGrid, period
from patterns import (
    PATTERNS,
    extent,
    get_pattern,
    parse_picture,
    parse_rle,
    place,
    random_grid,
    read_rle_file,
)

GLIDER_RLE = """#N Glider
#C a comment line
x = 3, y = 3, rule = B3/S23
bob$2bo$3o!
"""


def test_parse_picture_reads_alive_glyphs():
    assert parse_picture(['#.', '.O']) == {(0, 0), (1, 1)}
    assert parse_picture(['*  o']) == {(0, 0), (3, 0)}


def test_every_named_pattern_parses():
    for name in PATTERNS:
        assert get_pattern(name)


def test_glider_gun_shape():
    gun = get_pattern('gosper_glider_gun')
    assert extent(gun) == (36, 9)
    assert len(gun) == 36


def test_unknown_pattern():
    with pytest.raises(ValueError, match='unknown pattern'):
        get_pattern('spaceship')


def test_parse_rle_glider():
    width, height, cells = parse_rle(GLIDER_RLE)
    assert (width, height) == (3, 3)
    assert cells == get_pattern('glider')


def test_parse_rle_multi_digit_runs_and_row_skips():
    width, height, cells = parse_rle("x = 12, y = 4\n10bo$\n2$o!")
    assert (width, height) == (12, 4)
    assert cells == {(10, 0), (0, 3)}


def test_parse_rle_ignores_data_after_bang():
    _, _, cells = parse_rle("x = 2, y = 1\n2o!oooo")
    assert cells == {(0, 0), (1, 0)}


def test_parse_rle_needs_dimensions():
    with pytest.raises(ValueError, match='dimensions'):
        parse_rle("bob$2bo$3o!")


def test_parse_rle_rejects_unknown_tokens():
    with pytest.raises(ValueError):
        parse_rle("x = 3, y = 1\n3z!")


def test_read_rle_file(tmp_path):
    path = tmp_path / 'glider.rle'
    path.write_text(GLIDER_RLE)
    assert read_rle_file(str(path)) == (3, 3, get_pattern('glider'))


def test_place_shifts_pattern():
    grid = place(get_pattern('blinker'), 5, 5, 1, 2)
    assert isinstance(grid, DenseGrid)
    assert grid.alive_cells() == {(1, 2), (2, 2), (3, 2)}
    assert period(grid) == 2


def test_place_uses_requested_storage():
    grid = place(get_pattern('block'), 4, 4, storage='sparse')
    assert isinstance(grid, SparseGrid)
    assert grid.population == 4


def test_place_rejects_patterns_that_do_not_fit():
    with pytest.raises(ValueError, match='does not fit'):
        place(get_pattern('gosper_glider_gun'), 30, 30)
    with pytest.raises(ValueError):
        place(get_pattern('glider'), 5, 5, 3, 0)
    with pytest.raises(ValueError):
        place(get_pattern('glider'), 5, 5, -1, 0)


def test_still_lifes_and_oscillators_from_the_catalogue():
    assert period(place(get_pattern('block'), 6, 6, 2, 2)) == 1
    assert period(place(get_pattern('toad'), 8, 8, 2, 2)) == 2
    assert period(place(get_pattern('beacon'), 8, 8, 2, 2)) == 2


def test_random_grid_is_reproducible():
    a = random_grid(10, 8, 0.3, seed=42)
    b = random_grid(10, 8, 0.3, seed=42, storage='sparse')
    assert a.shape == (8, 10)
    assert isinstance(b, SparseGrid)
    assert a == b


def test_random_grid_density_extremes():
    assert random_grid(6, 4, 0.0, seed=1).population == 0
    assert random_grid(6, 4, 1.0, seed=1).population == 24


def test_random_grid_rejects_bad_density():
    with pytest.raises(ValueError, match='density'):
        random_grid(4, 4, 1.5)
