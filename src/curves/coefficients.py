"""
どこで: `curves.coefficients`（係数ソルバ）。
何を: 1 軸ぶんの 4 制御値から 3 次多項式 f(t) = a·t³ + b·t² + c·t + d の係数を求める。
なぜ: Bezier/Hermite の差を「基底行列」だけに閉じ込め、平坦化側は多項式評価だけを扱うため。

基底行列（行 = a, b, c, d / 列 = 制御値）:

    Bezier3  [p0, p1, p2, p3]      Hermite3  [p0, p1, r0, r1]
      a: [-1,  3, -3,  1]            a: [ 2, -2,  1,  1]
      b: [ 3, -6,  3,  0]            b: [-3,  3, -2, -1]
      c: [-3,  3,  0,  0]            c: [ 0,  0,  1,  0]
      d: [ 1,  0,  0,  0]            d: [ 1,  0,  0,  0]
"""

from __future__ import annotations

import numpy as np

from common.types import Coefficients, ScalarFn

from .registry import basis

_BEZIER3_BASIS = np.array(
    [
        [-1.0, 3.0, -3.0, 1.0],
        [3.0, -6.0, 3.0, 0.0],
        [-3.0, 3.0, 0.0, 0.0],
        [1.0, 0.0, 0.0, 0.0],
    ],
    dtype=np.float64,
)

_HERMITE3_BASIS = np.array(
    [
        [2.0, -2.0, 1.0, 1.0],
        [-3.0, 3.0, -2.0, -1.0],
        [0.0, 0.0, 1.0, 0.0],
        [1.0, 0.0, 0.0, 0.0],
    ],
    dtype=np.float64,
)


def _solve(basis_matrix: np.ndarray, values: tuple[float, float, float, float]) -> Coefficients:
    coef = basis_matrix @ np.asarray(values, dtype=np.float64)
    return float(coef[0]), float(coef[1]), float(coef[2]), float(coef[3])


@basis
def bezier3(p0: float, p1: float, p2: float, p3: float) -> Coefficients:
    """3 次 Bezier の 1 軸係数。

    Parameters
    ----------
    p0, p3 : float
        端点。
    p1, p2 : float
        制御点。

    Returns
    -------
    Coefficients
        `(a, b, c, d)`。`f(0) == p0`, `f(1) == p3`。
    """
    return _solve(_BEZIER3_BASIS, (p0, p1, p2, p3))


@basis
def hermite3(p0: float, p1: float, r0: float, r1: float) -> Coefficients:
    """3 次 Hermite の 1 軸係数。

    Parameters
    ----------
    p0, p1 : float
        端点。
    r0, r1 : float
        各端点での接線（t に関する微分値）。

    Returns
    -------
    Coefficients
        `(a, b, c, d)`。`f(0) == p0`, `f(1) == p1`, `f'(0) == r0`, `f'(1) == r1`。
    """
    return _solve(_HERMITE3_BASIS, (p0, p1, r0, r1))


# 別名
bezier3_coefficients = bezier3
hermite3_coefficients = hermite3


def cubic(coefficients: Coefficients) -> ScalarFn:
    """係数 `(a, b, c, d)` から f(t) = a·t³ + b·t² + c·t + d を返す。"""
    a, b, c, d = (float(v) for v in coefficients)

    def f(t: float) -> float:
        return a * t * t * t + b * t * t + c * t + d

    return f


__all__ = ["bezier3", "hermite3", "bezier3_coefficients", "hermite3_coefficients", "cubic"]
