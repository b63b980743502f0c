"""
どこで: `engine.core` の行列乗算カーネル。
何を: 行優先フラット配列どうしの積を、行/列のストライド走査だけで計算する Numba 関数群。
なぜ: 転置コピーを作らずに `Matrix.multiply` / `Matrix.transposed_multiply` を高速化するため。

インデックス規約:
- 要素 (r, c) はフラット位置 `r * ncols + c`。
- 行 r は `[r*ncols, r*ncols + ncols)` の連続区間、列 c は `c` から `ncols` 刻み。
- 内積は k の昇順に逐次加算する（`numpy.dot` の実装依存の加算順とは独立）。
"""

from __future__ import annotations

import numpy as np
from numba import njit  # type: ignore[attr-defined]


@njit(cache=True)
def mul_flat(
    a: np.ndarray, a_ncols: int, b: np.ndarray, b_ncols: int, frows: int, fcols: int
) -> np.ndarray:
    """`a × b`。出力 (r, c) = a の行 r · b の列 c。"""
    out = np.empty(frows * fcols, dtype=np.float64)
    for i in range(frows * fcols):
        r = i // fcols
        c = i % fcols
        acc = 0.0
        for k in range(a_ncols):
            acc += a[r * a_ncols + k] * b[k * b_ncols + c]
        out[i] = acc
    return out


@njit(cache=True)
def transposed_mul_flat(
    a: np.ndarray, a_ncols: int, b: np.ndarray, b_ncols: int, frows: int, fcols: int
) -> np.ndarray:
    """`aᵀ × bᵀ`。出力 (r, c) = a の列 r · b の行 c（内積長は b_ncols == a_nrows）。"""
    out = np.empty(frows * fcols, dtype=np.float64)
    for i in range(frows * fcols):
        r = i // fcols
        c = i % fcols
        acc = 0.0
        for k in range(b_ncols):
            acc += a[k * a_ncols + r] * b[c * b_ncols + k]
        out[i] = acc
    return out


__all__ = ["mul_flat", "transposed_mul_flat"]
