"""
どこで: `engine.core` の点/辺専用行列。
何を: 列数を 4（x, y, z, w）に固定した `Matrix` の薄いサブクラス `EdgeMatrix`。
なぜ: 4 列以外の行列への辺追加という誤用を、追加時ではなく生成時に検出するため。

- 生成時に `ncols != 4` なら `ValueError`。
- `Matrix.multiply_into(a, edges)` は `a × edges` で列数 4 を保つため、置換後も `EdgeMatrix` のまま。
- 辺は連続する 2 行。`n_edges` / `iter_edges()` で辺単位に読み出せる。
"""

from __future__ import annotations

from typing import Iterator

import numpy as np

from .matrix import EDGE_NCOLS, DataLike, Matrix


class EdgeMatrix(Matrix):
    """4 列固定の点/辺行列。

    使用例:
        edges = EdgeMatrix()
        edges.append_edge([0, 0, 0, 1, 1, 0])
        edges.add_circle((0.0, 0.0, 0.0), 1.0)
    """

    __slots__ = ()

    def __init__(self, nrows: int = 0, ncols: int = EDGE_NCOLS, data: DataLike = ()) -> None:
        if ncols != EDGE_NCOLS:
            raise ValueError(f"EdgeMatrix requires ncols == {EDGE_NCOLS}: got {ncols}")
        super().__init__(nrows, ncols, data)

    @classmethod
    def from_matrix(cls, m: Matrix) -> "EdgeMatrix":
        """既存の 4 列行列の内容をコピーして `EdgeMatrix` にする。"""
        return cls(m.nrows, m.ncols, m.data.copy())

    @property
    def n_edges(self) -> int:
        """辺の本数（行数 // 2）。"""
        return self.nrows // 2

    def iter_edges(self) -> Iterator[tuple[np.ndarray, np.ndarray]]:
        """各辺の始点行/終点行を読み取り専用ビューの組で返す。"""
        for i in range(self.n_edges):
            yield self.row_view(2 * i), self.row_view(2 * i + 1)


__all__ = ["EdgeMatrix"]
