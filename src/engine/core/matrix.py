"""
行優先の密行列 `Matrix`（ワイヤーフレーム・パイプラインの幾何中核）

本モジュールは、点/辺の同次座標の保持、変換行列の合成、パラメトリック曲線の
折れ線（辺リスト）への平坦化を担う唯一の行列型 `Matrix` を提供する。

データモデル（不変条件）:
- `data: float64 ndarray (nrows * ncols,)`: 1 本の連続メモリに行を順に連結して保持。
- 要素 (r, c) はフラット位置 `r * ncols + c`（行優先）。全ての変更操作の後でも成立する。
- `len(data) == nrows * ncols` は常に成立。破る入力は生成/追加時に `ValueError`。
- 内部バッファは容量倍々で確保し、行/辺の追加を償却 O(1) にする。`data` は常に
  有効領域 `[0, nrows * ncols)` のみを返す。

点/辺の規約（型ではなく使い方の規約）:
- 各行は `[x, y, z, w]`（点は w = 1）、4 列。
- 1 本の辺は連続する 2 行。`append_edge` が 6 値 `[x0,y0,z0,x1,y1,z1]` から 2 行を追加する。
- 4 列を型で保証したい場合は `engine.core.edge_matrix.EdgeMatrix` を使う。

直感図（2 本の辺を持つ 4×4 行列）:

    # append_edge([0, 0, 0, 1, 0, 0]); append_edge([1, 0, 0, 1, 1, 0])
    #
    #   row  x  y  z  w
    #   0   [0, 0, 0, 1]   ┐ 辺0
    #   1   [1, 0, 0, 1]   ┘
    #   2   [1, 0, 0, 1]   ┐ 辺1
    #   3   [1, 1, 0, 1]   ┘
    #
    # data = [0,0,0,1, 1,0,0,1, 1,0,0,1, 1,1,0,1]

エラー方針:
- 次元不一致（生成・追加・乗算）、辺入力の長さ不正、4 列以外への辺追加は `ValueError`。
- 範囲外への書き込み（`set`）と範囲外のビュー取得は `IndexError`。
- 範囲外の読み取り（`get`）だけは `None` を返し、呼び出し側が安全に境界を探れる。

使用例:
    from engine.core.matrix import Matrix
    from engine.core import transforms as T

    edges = Matrix(0, 4, [])
    edges.add_circle((0.0, 0.0, 0.0), 50.0)
    m = T.compose(T.scale(2, 2, 2), T.rotate_z(30), T.translate(100, 100, 0))
    print(m)
"""

from __future__ import annotations

import logging
import math
import operator
from typing import Iterator, Sequence

import numpy as np

from common import settings as _settings
from common.types import ScalarFn, Vec2, Vec3
from curves.coefficients import cubic
from curves.parametric import Parametric
from curves.registry import get_basis

from . import matrix_kernels as _kernels

logger = logging.getLogger(__name__)

NumberLike = float | int
DataLike = np.ndarray | Sequence[NumberLike]

# 点/辺行列の列数（x, y, z, w）
EDGE_NCOLS = 4
EDGE_LEN = 6

_MIN_CAPACITY = 16


def _as_dim(value: int, name: str) -> int:
    dim = operator.index(value)
    if dim < 0:
        raise ValueError(f"{name} は 0 以上である必要があります: got {dim}")
    return dim


def _as_flat_float64(data: DataLike) -> np.ndarray:
    """1 次元・書き込み可能な float64 連続配列に正規化する（既に適合していればコピーしない）。"""
    arr = np.asarray(data, dtype=np.float64)
    if arr.ndim != 1:
        arr = arr.reshape(-1)
    if not arr.flags.c_contiguous:
        arr = np.ascontiguousarray(arr)
    if not arr.flags.writeable:
        arr = arr.copy()
    return arr


def _index_to_rc(i: int, ncols: int) -> tuple[int, int]:
    """フラット位置 i を (row, col) に分解する。"""
    return i // ncols, i % ncols


class Matrix:
    """行優先の密行列。

    フィールド:
    - `nrows`, `ncols`: 行数/列数（読み取り専用プロパティ）。
    - `data`: 行優先フラット配列（有効領域へのビュー）。

    設計意図:
    - バッファは各インスタンスが排他的に所有する。`copy()` は深いコピー。
    - 変更操作は `set` / `append_row` / `append_edge(s)` / `to_identity` /
      `Matrix.multiply_into` のみ。`multiply` 系は常に新しい行列を返す。
    - スレッド間共有時の変更は呼び出し側で直列化すること（内部ロックは持たない）。
    """

    __slots__ = ("_nrows", "_ncols", "_buf")

    def __init__(self, nrows: int, ncols: int, data: DataLike) -> None:
        nrows = _as_dim(nrows, "nrows")
        ncols = _as_dim(ncols, "ncols")
        buf = _as_flat_float64(data)
        if buf.shape[0] != nrows * ncols:
            raise ValueError(
                f"nrows * ncols must == len(data): {nrows} * {ncols} != {buf.shape[0]}"
            )
        self._nrows = nrows
        self._ncols = ncols
        self._buf = buf

    # ── ファクトリ ───────────────────
    @classmethod
    def from_copy(cls, nrows: int, ncols: int, data: DataLike) -> "Matrix":
        """`data` を深いコピーして生成する（呼び出し側のバッファは共有しない）。"""
        return cls(nrows, ncols, np.array(data, dtype=np.float64, copy=True).reshape(-1))

    @classmethod
    def zeros(cls, nrows: int, ncols: int) -> "Matrix":
        """全要素 0.0 の行列。"""
        nrows = _as_dim(nrows, "nrows")
        ncols = _as_dim(ncols, "ncols")
        return cls(nrows, ncols, np.zeros(nrows * ncols, dtype=np.float64))

    @classmethod
    def from_rows(
        cls, rows: Sequence[Sequence[NumberLike]] | np.ndarray, *, ncols: int | None = None
    ) -> "Matrix":
        """行の列（2 次元 array-like）から生成する。

        Parameters
        ----------
        rows : 2 次元 array-like
            各要素が 1 行。全行の長さは等しいこと。
        ncols : int, optional
            `rows` が空のときの列数。非空の場合は行長と一致している必要がある。

        Raises
        ------
        ValueError
            行長が揃っていない、または `ncols` と矛盾する場合。
        """
        if len(rows) == 0:
            return cls(0, 0 if ncols is None else ncols, np.empty(0, dtype=np.float64))
        try:
            arr = np.array(rows, dtype=np.float64)
        except ValueError as exc:
            raise ValueError("行の長さが揃っていません") from exc
        if arr.ndim != 2:
            raise ValueError(f"rows は 2 次元である必要があります: got shape {arr.shape}")
        if ncols is not None and arr.shape[1] != ncols:
            raise ValueError(f"行長 {arr.shape[1]} と ncols={ncols} が一致しません")
        return cls(arr.shape[0], arr.shape[1], arr.reshape(-1))

    @classmethod
    def identity(cls, size: int) -> "Matrix":
        """`size × size` の単位行列。"""
        m = cls.zeros(size, size)
        for i in range(m.nrows):
            m.set(i, i, 1.0)
        return m

    # ── 基本属性 ────────────────────
    @property
    def nrows(self) -> int:
        return self._nrows

    @property
    def ncols(self) -> int:
        return self._ncols

    @property
    def shape(self) -> tuple[int, int]:
        return self._nrows, self._ncols

    @property
    def size(self) -> int:
        return self._nrows * self._ncols

    @property
    def data(self) -> np.ndarray:
        """有効領域のフラット配列（読み取り専用ビュー）。書き込みは `set` を使う。"""
        view = self._buf[: self.size]
        view.setflags(write=False)
        return view

    @property
    def is_empty(self) -> bool:
        return self._nrows == 0 or self._ncols == 0

    def _index(self, row: int, col: int) -> int:
        return row * self._ncols + col

    # ── 要素アクセス ─────────────────
    def get(self, row: int, col: int) -> float | None:
        """(row, col) の値。範囲外（負値、`row == nrows`、`col == ncols` を含む）は `None`。"""
        if not (0 <= row < self._nrows and 0 <= col < self._ncols):
            return None
        return float(self._buf[self._index(row, col)])

    def set(self, row: int, col: int, value: float) -> None:
        """(row, col) を上書きする。範囲外は `IndexError`。"""
        if not (0 <= row < self._nrows and 0 <= col < self._ncols):
            raise IndexError(
                f"Index out of bound: ({row}, {col}) for {self._nrows} by {self._ncols} matrix"
            )
        self._buf[self._index(row, col)] = value

    # ── ビュー（コピーなし・読み取り専用） ──
    def row_view(self, r: int) -> np.ndarray:
        """行 r の `ncols` 個の連続値（読み取り専用ビュー）。"""
        if not 0 <= r < self._nrows:
            raise IndexError(f"row {r} out of range for {self._nrows} rows")
        start = r * self._ncols
        view = self._buf[start : start + self._ncols]
        view.setflags(write=False)
        return view

    def col_view(self, c: int) -> np.ndarray:
        """列 c（オフセット c・ストライド ncols の読み取り専用ビュー）。"""
        if not 0 <= c < self._ncols:
            raise IndexError(f"col {c} out of range for {self._ncols} cols")
        view = self.data[c :: self._ncols]
        view.setflags(write=False)
        return view

    def rows_view(self) -> Iterator[np.ndarray]:
        """行ビューを行順に遅延生成する。"""
        for r in range(self._nrows):
            yield self.row_view(r)

    def as_array(self, *, copy: bool = False) -> np.ndarray:
        """`(nrows, ncols)` の 2 次元配列を返す。

        `copy=False` は読み取り専用ビュー（`setflags(write=False)`）。外部からの
        就地変更で不変条件を壊さないため。書き込みが必要なら `copy=True`。
        """
        arr = self.data.reshape(self._nrows, self._ncols)
        if copy:
            return arr.copy()
        arr.setflags(write=False)
        return arr

    # ── 行/辺の追加 ─────────────────
    def _reserve(self, extra: int) -> None:
        need = self.size + extra
        cap = self._buf.shape[0]
        if need <= cap:
            return
        new_cap = max(need, 2 * cap, _MIN_CAPACITY)
        new_buf = np.empty(new_cap, dtype=np.float64)
        new_buf[: self.size] = self.data
        self._buf = new_buf

    def append_row(self, values: DataLike) -> None:
        """1 行を末尾に追加する（`nrows += 1`）。長さが `ncols` と異なれば `ValueError`。"""
        row = np.asarray(values, dtype=np.float64)
        if row.ndim != 1 or row.shape[0] != self._ncols:
            raise ValueError(
                f"Length of row and matrix column size don't match: {row.shape} vs ncols={self._ncols}"
            )
        self._reserve(self._ncols)
        start = self.size
        self._buf[start : start + self._ncols] = row
        self._nrows += 1

    def _require_edge_layout(self) -> None:
        if self._ncols != EDGE_NCOLS:
            raise ValueError(
                f"edges can only be appended to a {EDGE_NCOLS}-column matrix: ncols={self._ncols}"
            )

    def append_edge(self, edge: DataLike) -> None:
        """辺 `[x0, y0, z0, x1, y1, z1]` を 2 行 `[x0,y0,z0,1]`, `[x1,y1,z1,1]` として追加する。

        `append_row` を 2 回呼ぶのではなく、1 回の呼び出しで `nrows += 2` とする。

        Raises
        ------
        ValueError
            入力がちょうど 6 値でない場合、または `ncols != 4` の場合。
        """
        arr = np.asarray(edge, dtype=np.float64)
        if arr.ndim != 1 or arr.shape[0] != EDGE_LEN:
            raise ValueError(f"Len of edge vec should be {EDGE_LEN}: got shape {arr.shape}")
        self.append_edges(arr.reshape(1, EDGE_LEN))

    def append_edges(self, edges: np.ndarray | Sequence[Sequence[NumberLike]]) -> None:
        """`(K, 6)` の辺をまとめて追加する（`nrows += 2K`）。`append_edge` の一括版。"""
        self._require_edge_layout()
        arr = np.asarray(edges, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] != EDGE_LEN:
            raise ValueError(f"edges は形状 (K, {EDGE_LEN}) である必要があります: got {arr.shape}")
        k = arr.shape[0]
        if k == 0:
            return
        self._reserve(k * 2 * EDGE_NCOLS)
        start = self.size
        block = self._buf[start : start + k * 2 * EDGE_NCOLS].reshape(k, 2, EDGE_NCOLS)
        block[:, 0, :3] = arr[:, :3]
        block[:, 1, :3] = arr[:, 3:]
        block[:, :, 3] = 1.0
        self._nrows += 2 * k

    # ── 乗算 ──────────────────────
    def multiply(self, other: "Matrix") -> "Matrix":
        """`self × other` を新しい行列で返す。

        出力 (r, c) は `self.row_view(r)` と `other.col_view(c)` の内積（転置コピーは作らない）。
        `n×0` と `0×m` の積は `n×m` のゼロ行列。

        Raises
        ------
        ValueError
            `self.ncols != other.nrows` の場合。
        """
        if self._ncols != other.nrows:
            raise ValueError(
                f"ncols of m1 must == nrows of m2: {self.shape} x {other.shape}"
            )
        frows, fcols = self._nrows, other.ncols
        if _settings.get().USE_NUMBA:
            fdata = _kernels.mul_flat(self.data, self._ncols, other.data, other.ncols, frows, fcols)
        else:
            fdata = np.empty(frows * fcols, dtype=np.float64)
            for i in range(frows * fcols):
                r, c = _index_to_rc(i, fcols)
                fdata[i] = np.dot(self.row_view(r), other.col_view(c))
        return Matrix(frows, fcols, fdata)

    def __matmul__(self, other: "Matrix") -> "Matrix":
        """糖衣: `multiply` のエイリアス（常に新しい行列）。"""
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.multiply(other)

    def transposed_multiply(self, other: "Matrix") -> "Matrix":
        """`selfᵀ × otherᵀ` を転置コピーなしで計算する。

        行/列ビューの役割を入れ替え、出力 (r, c) を `self.col_view(r)` と
        `other.row_view(c)` の内積とする。結果は `self.ncols × other.nrows`。
        注: 出力を列優先に並べる実装（セル (r, c) に `self.col_view(c)·other.row_view(r)`）
        とは転置の関係になる。正方行列でも結果が異なる。

        Raises
        ------
        ValueError
            `self.nrows != other.ncols` の場合。
        """
        if self._nrows != other.ncols:
            raise ValueError(
                f"nrows of m1 must == ncols of m2: {self.shape} x {other.shape}"
            )
        frows, fcols = self._ncols, other.nrows
        if _settings.get().USE_NUMBA:
            fdata = _kernels.transposed_mul_flat(
                self.data, self._ncols, other.data, other.ncols, frows, fcols
            )
        else:
            fdata = np.empty(frows * fcols, dtype=np.float64)
            for i in range(frows * fcols):
                r, c = _index_to_rc(i, fcols)
                fdata[i] = np.dot(self.col_view(r), other.row_view(c))
        return Matrix(frows, fcols, fdata)

    @staticmethod
    def multiply_into(a: "Matrix", b: "Matrix") -> None:
        """`b` の内容（次元とバッファ）を `a × b` で置き換える。

        変換行列 `a` を蓄積済みの点/辺行列 `b` に破壊的に適用する用途。評価順は常に
        `a × b`（`b × a` ではない）。失敗時（次元不一致）は `b` を変更しない。
        """
        product = a.multiply(b)
        b._replace_contents(product)
        logger.debug("multiply_into: b is now %d by %d", b.nrows, b.ncols)

    def _replace_contents(self, other: "Matrix") -> None:
        self._nrows = other.nrows
        self._ncols = other.ncols
        self._buf = other._buf

    def transpose(self) -> "Matrix":
        """転置行列（新しいバッファ）。"""
        flat = np.ascontiguousarray(self.as_array().T).reshape(-1)
        return Matrix(self._ncols, self._nrows, flat)

    # ── 単位行列化 ──────────────────
    def to_identity(self) -> None:
        """次元を保ったまま、対角 1.0・それ以外 0.0 に上書きする。

        対角は「フラット位置 i を `(i // ncols, i % ncols)` に分解して row == col」となる
        セルと定義する。正方でない行列にもこの規則をそのまま適用する。
        """
        n = self.size
        if n == 0:
            return
        rows, cols = np.divmod(np.arange(n), self._ncols)
        self._buf[:n] = (rows == cols).astype(np.float64)

    # ── 曲線の平坦化 ─────────────────
    def add_parametric(self, xf: ScalarFn, yf: ScalarFn, z: float, step: float) -> None:
        """パラメトリック曲線を折れ線として辺追加する。

        Parameters
        ----------
        xf, yf : ScalarFn
            t ∈ [0, 1] を受けて x / y を返す関数。
        z : float
            曲線を置く Z 値。
        step : float
            t の刻み（精度）。正の有限値。

        Notes
        -----
        N 個のサンプルの連続ペア `(x0, y0), (x1, y1)` ごとに辺 `[x0, y0, z, x1, y1, z]` を
        追加する。N ≤ 1 なら何も追加しない。結果は N − 1 辺（2(N − 1) 行）。
        """
        self._require_edge_layout()
        samples = Parametric(xf, yf).points(step)
        n = samples.shape[0]
        if n <= 1:
            return
        edges = np.empty((n - 1, EDGE_LEN), dtype=np.float64)
        edges[:, 0:2] = samples[:-1]
        edges[:, 3:5] = samples[1:]
        edges[:, 2] = z
        edges[:, 5] = z
        self.append_edges(edges)
        logger.debug("add_parametric: %d samples -> %d edges (step=%g)", n, n - 1, step)

    def add_circle(self, center: Vec3, radius: float, *, step: float | None = None) -> None:
        """中心 `(cx, cy, cz)`・半径 `radius` の円を Z = cz 平面に追加する。

        `step` 省略時は設定値 `CIRCLE_STEP`（既定 0.001）。
        """
        cx, cy, cz = (float(v) for v in center)
        r = float(radius)
        tau = 2.0 * math.pi
        self.add_parametric(
            lambda t: r * math.cos(t * tau) + cx,
            lambda t: r * math.sin(t * tau) + cy,
            cz,
            _settings.get().CIRCLE_STEP if step is None else step,
        )

    def add_cubic(
        self,
        basis: str,
        c0: Vec2,
        c1: Vec2,
        c2: Vec2,
        c3: Vec2,
        *,
        z: float = 0.0,
        step: float,
    ) -> None:
        """登録済みの係数基底 `basis` で 3 次曲線を追加する。

        x 成分と y 成分の係数を独立に求め、`f(t) = a·t³ + b·t² + c·t + d` として
        `add_parametric` に委譲する。未登録の基底名は `KeyError`。
        """
        solve = get_basis(basis)
        coef_x = solve(c0[0], c1[0], c2[0], c3[0])
        coef_y = solve(c0[1], c1[1], c2[1], c3[1])
        self.add_parametric(cubic(coef_x), cubic(coef_y), z, step)

    def add_bezier3(
        self, p0: Vec2, p1: Vec2, p2: Vec2, p3: Vec2, *, step: float | None = None
    ) -> None:
        """3 次 Bezier（端点 p0, p3・制御点 p1, p2）を Z = 0 に追加する（既定刻み 0.001）。"""
        self.add_cubic(
            "bezier3", p0, p1, p2, p3, step=_settings.get().BEZIER_STEP if step is None else step
        )

    def add_hermite3(
        self, p0: Vec2, p1: Vec2, r0: Vec2, r1: Vec2, *, step: float | None = None
    ) -> None:
        """3 次 Hermite（端点 p0, p1・接線 r0, r1）を Z = 0 に追加する。

        接線次第で曲率が大きくなるため、既定刻みは Bezier より細かい 0.0001。
        """
        self.add_cubic(
            "hermite3", p0, p1, r0, r1, step=_settings.get().HERMITE_STEP if step is None else step
        )

    # ── 複製/比較 ──────────────────
    def copy(self) -> "Matrix":
        """深いコピー（バッファを共有しない）。"""
        new = type(self).__new__(type(self))
        new._nrows = self._nrows
        new._ncols = self._ncols
        new._buf = self.data.copy()
        return new

    def __copy__(self) -> "Matrix":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "Matrix":
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.data, other.data))

    __hash__ = None  # type: ignore[assignment]

    def allclose(self, other: "Matrix", *, atol: float = 1e-9, rtol: float = 0.0) -> bool:
        """次元が等しく、全要素が許容差内で一致するか。"""
        return self.shape == other.shape and bool(
            np.allclose(self.data, other.data, rtol=rtol, atol=atol)
        )

    # ── 表示 ──────────────────────
    def __str__(self) -> str:
        return format_matrix(self)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"{type(self).__name__}(nrows={self._nrows}, ncols={self._ncols})"


def format_matrix(m: Matrix, precision: int | None = None) -> str:
    """デバッグ/ログ向けの文字列表現。

    - 0 行または 0 列: `Empty matrix (R by C)` の 1 行。
    - それ以外: ヘッダ `Matrix (R by C) {` の後、**列ごと**に 1 行（保存は行優先だが
      表示は列優先）。各値は小数 `precision` 桁（既定は設定値 `DISPLAY_PRECISION` = 2）で
      末尾に空白を付けて並べ、最後に `}`。

    例::

        Matrix (2 by 3) {
          1.00 4.00
          2.00 5.00
          3.00 6.00
        }
    """
    if m.is_empty:
        return f"Empty matrix ({m.nrows} by {m.ncols})"
    prec = _settings.get().DISPLAY_PRECISION if precision is None else int(precision)
    lines = [f"Matrix ({m.nrows} by {m.ncols}) {{"]
    for c in range(m.ncols):
        values = "".join(f"{v:.{prec}f} " for v in m.col_view(c).tolist())
        lines.append(f"  {values}")
    lines.append("}")
    return "\n".join(lines)


__all__ = ["Matrix", "format_matrix", "EDGE_NCOLS"]
