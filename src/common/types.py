"""
どこで: `common` の型定義。
何を: Vec2/Vec3・スカラー関数・3 次係数などの軽量エイリアス（組込みジェネリックで記述）。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

from typing import Callable

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]

# ℝ→ℝ のスカラー関数（パラメータ t → 座標値）
ScalarFn = Callable[[float], float]

# f(t) = a·t³ + b·t² + c·t + d の係数 (a, b, c, d)
Coefficients = tuple[float, float, float, float]


__all__ = ["Vec2", "Vec3", "ScalarFn", "Coefficients"]
