from __future__ import annotations

import copy

import numpy as np
import pytest

from engine.core.matrix import Matrix

# What this tests
# - 生成時の次元検証（所有/コピー）。
# - get/set の境界（get は None、set は IndexError）。
# - row/col/rows ビューがコピーなし・読み取り専用・再走査可能であること。
# - to_identity（正方・非正方）、copy/eq、from_rows、transpose。


def test_new_validates_length() -> None:
    with pytest.raises(ValueError):
        Matrix(2, 3, [1.0, 2.0, 3.0])
    with pytest.raises(ValueError):
        Matrix(0, 4, [1.0])
    m = Matrix(0, 4, [])
    assert m.shape == (0, 4)
    assert m.data.shape == (0,)


def test_new_takes_ownership_without_copy() -> None:
    buf = np.arange(6, dtype=np.float64)
    m = Matrix(2, 3, buf)
    m.set(0, 0, 42.0)
    assert buf[0] == 42.0


def test_from_copy_leaves_caller_buffer_untouched() -> None:
    buf = np.arange(6, dtype=np.float64)
    m = Matrix.from_copy(2, 3, buf)
    m.set(0, 0, 42.0)
    assert buf[0] == 0.0
    with pytest.raises(ValueError):
        Matrix.from_copy(2, 2, buf)


def test_negative_dimensions_rejected() -> None:
    with pytest.raises(ValueError):
        Matrix(-1, 0, [])


def test_get_and_set_round_trip(m2x3: Matrix) -> None:
    assert m2x3.get(1, 2) == 6.0
    m2x3.set(1, 2, -3.5)
    assert m2x3.get(1, 2) == -3.5
    # 行優先: (r, c) はフラット位置 r * ncols + c
    assert m2x3.data[1 * 3 + 2] == -3.5


def test_get_out_of_bounds_returns_none(m2x3: Matrix) -> None:
    assert m2x3.get(2, 0) is None  # row == nrows
    assert m2x3.get(0, 3) is None  # col == ncols
    assert m2x3.get(5, 5) is None
    assert m2x3.get(-1, 0) is None


def test_set_out_of_bounds_raises(m2x3: Matrix) -> None:
    with pytest.raises(IndexError):
        m2x3.set(2, 0, 1.0)
    with pytest.raises(IndexError):
        m2x3.set(0, 3, 1.0)
    with pytest.raises(IndexError):
        m2x3.set(-1, 0, 1.0)


def test_row_and_col_views(m2x3: Matrix) -> None:
    assert m2x3.row_view(1).tolist() == [4.0, 5.0, 6.0]
    assert m2x3.col_view(1).tolist() == [2.0, 5.0]
    # 再走査可能
    col = m2x3.col_view(2)
    assert list(col) == list(col) == [3.0, 6.0]
    # コピーなし（元バッファの変更が見える）
    row = m2x3.row_view(0)
    m2x3.set(0, 1, 9.0)
    assert row[1] == 9.0
    assert np.shares_memory(col, m2x3.data)


def test_views_are_read_only(m2x3: Matrix) -> None:
    with pytest.raises(ValueError):
        m2x3.row_view(0)[0] = 1.0
    with pytest.raises(ValueError):
        m2x3.col_view(0)[0] = 1.0
    with pytest.raises(ValueError):
        m2x3.as_array()[0, 0] = 1.0
    with pytest.raises(ValueError):
        m2x3.data[0] = 99.0
    assert m2x3.get(0, 0) == 1.0
    # コピーは書き込み可で、元を変えない
    arr = m2x3.as_array(copy=True)
    arr[0, 0] = 100.0
    assert m2x3.get(0, 0) == 1.0


def test_view_index_errors(m2x3: Matrix) -> None:
    with pytest.raises(IndexError):
        m2x3.row_view(2)
    with pytest.raises(IndexError):
        m2x3.col_view(3)


def test_rows_view_in_row_order(m2x3: Matrix) -> None:
    rows = [r.tolist() for r in m2x3.rows_view()]
    assert rows == [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]
    assert list(Matrix(0, 4, []).rows_view()) == []


def test_new_identity() -> None:
    assert Matrix.identity(3) == Matrix(3, 3, [1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0])
    assert Matrix.identity(1) == Matrix(1, 1, [1.0])
    assert Matrix.identity(0).shape == (0, 0)


def test_to_identity_in_place() -> None:
    m = Matrix(5, 5, [120.0] * 25)
    m.to_identity()
    assert m == Matrix.identity(5)

    m = Matrix(1, 1, [50.0])
    m.to_identity()
    assert m == Matrix.identity(1)


def test_to_identity_non_square_uses_flat_index_rule() -> None:
    wide = Matrix(2, 3, [9.0] * 6)
    wide.to_identity()
    assert wide.data.tolist() == [1.0, 0.0, 0.0, 0.0, 1.0, 0.0]

    tall = Matrix(3, 2, [9.0] * 6)
    tall.to_identity()
    assert tall.data.tolist() == [1.0, 0.0, 0.0, 1.0, 0.0, 0.0]


def test_copy_is_deep(m2x3: Matrix) -> None:
    for dup in (m2x3.copy(), copy.copy(m2x3), copy.deepcopy(m2x3)):
        assert dup == m2x3
        assert not np.shares_memory(dup.data, m2x3.data)
        dup.set(0, 0, -1.0)
        assert m2x3.get(0, 0) == 1.0


def test_equality_and_allclose() -> None:
    a = Matrix(1, 2, [1.0, 2.0])
    assert a == Matrix(1, 2, [1.0, 2.0])
    assert a != Matrix(2, 1, [1.0, 2.0])
    assert a.allclose(Matrix(1, 2, [1.0 + 1e-12, 2.0]))
    assert not a.allclose(Matrix(1, 2, [1.1, 2.0]))


def test_from_rows_and_transpose() -> None:
    m = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
    assert m.shape == (2, 3)
    t = m.transpose()
    assert t == Matrix(3, 2, [1.0, 4.0, 2.0, 5.0, 3.0, 6.0])

    assert Matrix.from_rows([], ncols=4).shape == (0, 4)
    with pytest.raises(ValueError):
        Matrix.from_rows([[1, 2], [3]])
    with pytest.raises(ValueError):
        Matrix.from_rows([[1, 2]], ncols=3)


def test_read_only_input_is_copied_on_construction(m2x3: Matrix) -> None:
    m = Matrix(2, 3, m2x3.as_array())
    m.set(0, 0, 7.0)
    assert m.get(0, 0) == 7.0
    assert m2x3.get(0, 0) == 1.0
