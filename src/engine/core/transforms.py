"""
どこで: `engine.core` の変換行列ジェネレータ。
何を: 4×4 同次座標の identity/translate/scale/rotate_x/y/z と、左から順に掛ける `compose()`。
なぜ: 変換の生成を副作用のない小さな純関数に分け、`Matrix` 本体を格納/演算に専念させるため。

セル配置（行優先、(row, col)）:
- translate: (3,0)=dx, (3,1)=dy, (3,2)=dz（平行移動は 4 行目）。
- scale: (0,0)=sx, (1,1)=sy, (2,2)=sz。
- rotate_x: cos → (1,1),(2,2) / -sin → (1,2) / sin → (2,1)。
- rotate_y: cos → (0,0),(2,2) / sin → (0,2) / -sin → (2,0)。
- rotate_z: cos → (0,0),(1,1) / sin → (1,0) / -sin → (0,1)。

符号と配置は下流の合成順との互換のため固定（教科書的な別の規約へ揃え直さないこと）。
角度は度数法で受け取り、内部でラジアンに変換する。
"""

from __future__ import annotations

import math

from .matrix import Matrix


def identity(size: int = 4) -> Matrix:
    """`size × size` の単位行列。"""
    return Matrix.identity(size)


def translate(dx: float, dy: float, dz: float) -> Matrix:
    """平行移動行列（4 行目に dx, dy, dz）。"""
    m = Matrix.identity(4)
    m.set(3, 0, dx)
    m.set(3, 1, dy)
    m.set(3, 2, dz)
    return m


def scale(sx: float, sy: float, sz: float) -> Matrix:
    """拡大縮小行列（対角に sx, sy, sz）。"""
    m = Matrix.identity(4)
    m.set(0, 0, sx)
    m.set(1, 1, sy)
    m.set(2, 2, sz)
    return m


def rotate_x(angle_deg: float) -> Matrix:
    a = math.radians(angle_deg)
    c, s = math.cos(a), math.sin(a)
    # fmt: off
    return Matrix(4, 4, [
        1.0, 0.0, 0.0, 0.0,
        0.0, c,   -s,  0.0,
        0.0, s,   c,   0.0,
        0.0, 0.0, 0.0, 1.0,
    ])
    # fmt: on


def rotate_y(angle_deg: float) -> Matrix:
    a = math.radians(angle_deg)
    c, s = math.cos(a), math.sin(a)
    # fmt: off
    return Matrix(4, 4, [
        c,   0.0, s,   0.0,
        0.0, 1.0, 0.0, 0.0,
        -s,  0.0, c,   0.0,
        0.0, 0.0, 0.0, 1.0,
    ])
    # fmt: on


def rotate_z(angle_deg: float) -> Matrix:
    a = math.radians(angle_deg)
    c, s = math.cos(a), math.sin(a)
    m = Matrix.identity(4)
    m.set(0, 0, c)
    m.set(1, 1, c)
    m.set(1, 0, s)
    m.set(0, 1, -s)
    return m


def compose(*matrices: Matrix) -> Matrix:
    """左から順に掛けた積 `m0 × m1 × ... × mk` を返す。

    引数なしの場合は `identity(4)`。入力はいずれも変更しない。

    例:
        compose(scale(2, 2, 2), rotate_z(90), translate(10, 0, 0))
    """
    if not matrices:
        return identity(4)
    result = matrices[0].copy()
    for m in matrices[1:]:
        result = result.multiply(m)
    return result


__all__ = ["identity", "translate", "scale", "rotate_x", "rotate_y", "rotate_z", "compose"]
