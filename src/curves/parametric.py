"""
どこで: `curves.parametric`（パラメトリック・サンプラ）。
何を: 2 つのスカラー関数 x(t), y(t) を t ∈ [0, 1] で刻み `step` ごとに評価し、(x, y) 列を返す。
なぜ: 曲線の定義（関数）と平坦化（辺の追加）を分離し、`Matrix.add_parametric` を単純に保つため。

サンプル位置:
- `n = ceil(1 / step)`、`t_i = min(i * step, 1.0)`（i = 0..n）。
- 端点 0 と 1 を必ず含む。`1 / step` が整数でない場合、最後の区間だけ短くなる。

    # 例: step=0.3 → t = [0.0, 0.3, 0.6, 0.9, 1.0]（5 サンプル、4 区間）
"""

from __future__ import annotations

import math
from typing import Iterator

import numpy as np

from common.types import ScalarFn, Vec2

# 1/step の丸め誤差（例: 1/0.001 = 1000.0000000000001）で区間が 1 つ増えないための許容差
_STEP_EPS = 1e-9


def parameter_values(step: float) -> np.ndarray:
    """[0, 1] 上のサンプルパラメータ列を返す。

    Raises
    ------
    ValueError
        `step` が正の有限値でない場合。
    """
    step_f = float(step)
    if not math.isfinite(step_f) or step_f <= 0.0:
        raise ValueError(f"step は正の有限値である必要があります: got {step!r}")
    n = max(1, int(math.ceil(1.0 / step_f - _STEP_EPS)))
    ts = np.arange(n + 1, dtype=np.float64) * step_f
    np.minimum(ts, 1.0, out=ts)
    ts[-1] = 1.0
    return ts


class Parametric:
    """x(t), y(t) の組で表される平面パラメトリック曲線。

    関数はスカラー入力を受け取る任意の callable（`math.cos` ベースの lambda 等）でよく、
    配列対応は要求しない。
    """

    __slots__ = ("xf", "yf")

    def __init__(self, xf: ScalarFn, yf: ScalarFn) -> None:
        self.xf = xf
        self.yf = yf

    def points(self, step: float) -> np.ndarray:
        """サンプル列を `(N, 2) float64` 配列で返す（t の昇順）。"""
        ts = parameter_values(step)
        out = np.empty((ts.shape[0], 2), dtype=np.float64)
        for i, t in enumerate(ts.tolist()):
            out[i, 0] = self.xf(t)
            out[i, 1] = self.yf(t)
        return out

    def iter_points(self, step: float) -> Iterator[Vec2]:
        """サンプルを `(x, y)` タプルとして遅延生成する。"""
        for t in parameter_values(step).tolist():
            yield float(self.xf(t)), float(self.yf(t))

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"Parametric(x={self.xf!r}, y={self.yf!r})"


__all__ = ["Parametric", "parameter_values"]
