import pytest

from polyfall.game import Cell, Piece, PlacedCell, rotate_2d

from conftest import make_piece


def _coords(piece):
    return [(c.x, c.y) for c in piece.cells]


def test_rotate_2d_directions():
    assert rotate_2d(True, (1, 0)) == (0, -1)
    assert rotate_2d(False, (1, 0)) == (0, 1)
    assert rotate_2d(True, (2, 3)) == (3, -2)
    assert rotate_2d(False, (2, 3)) == (-3, 2)


def test_rotation_turns_around_center_of_mass(t_piece):
    rotated = t_piece.rotated(True)
    assert _coords(rotated) == [(0, 1), (0, 0), (0, -1), (1, 0)]
    assert rotated.center_of_mass == t_piece.center_of_mass


def test_rotation_uses_offset_pivot():
    piece = make_piece([(1, 1), (2, 1)], center=(1, 1))
    assert _coords(piece.rotated(True)) == [(1, 1), (1, 0)]
    assert _coords(piece.rotated(False)) == [(1, 1), (1, 2)]


@pytest.mark.parametrize("clockwise", [True, False])
def test_four_quarter_turns_are_identity(t_piece, clockwise):
    piece = t_piece
    for _ in range(4):
        piece = piece.rotated(clockwise)
    assert piece == t_piece


def test_two_turns_each_way_are_identity(t_piece):
    piece = t_piece.rotated(True).rotated(True).rotated(False).rotated(False)
    assert piece == t_piece


def test_rotated_does_not_mutate(t_piece):
    before = _coords(t_piece)
    t_piece.rotated(True)
    assert _coords(t_piece) == before


def test_cells_keep_their_hue_through_rotation():
    piece = make_piece([(0, 0), (1, 0)], hue=0.25)
    assert {c.cell for c in piece.rotated(False).cells} == {Cell(0.25)}


def test_project_maps_center_of_mass_onto_anchor(horizontal_four):
    projected = horizontal_four.project((5, 7))
    assert [(x, y) for _, x, y in projected] == [(3, 7), (4, 7), (5, 7), (6, 7)]
    assert len(projected) == len(horizontal_four)


def test_project_returns_fresh_sequence(horizontal_four):
    first = horizontal_four.project((2, 0))
    second = horizontal_four.project((2, 0))
    assert first == second
    assert first is not second
    first.clear()
    assert len(horizontal_four.project((2, 0))) == 4


def test_clearance_counts_cells_above_pivot():
    assert make_piece([(0, 0), (1, 0)]).clearance() == 0
    assert make_piece([(0, -2), (0, -1), (0, 0)]).clearance() == 2
    # center below the origin pushes cells above it
    assert make_piece([(0, 0), (0, 1), (0, 2)], center=(0, 1)).clearance() == 1


def test_piece_requires_cells():
    with pytest.raises(ValueError):
        Piece((), (0, 0))


def test_piece_is_frozen(t_piece):
    with pytest.raises(AttributeError):
        t_piece.center_of_mass = (1, 1)


def test_piece_accepts_any_iterable_of_cells():
    cell = Cell(0.1)
    piece = Piece((PlacedCell(cell, x, 0) for x in range(3)), (1, 0))
    assert len(piece) == 3
    assert isinstance(piece.cells, tuple)


def test_piece_rejects_fractional_center():
    cell = Cell(0.1)
    with pytest.raises(ValueError):
        Piece((PlacedCell(cell, 0, 0), PlacedCell(cell, 1, 0)), (0.5, 0))
    assert Piece((PlacedCell(cell, 0, 0),), (1.0, 0)).center_of_mass == (1, 0)
