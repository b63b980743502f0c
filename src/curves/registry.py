"""
どこで: `curves` のレジストリ層（係数基底専用）。
何を: `@basis` で 3 次係数ソルバを関数名のまま登録し、`get_basis` で名前解決する。
なぜ: `Matrix.add_cubic` が基底を名前で受け取り、Bezier/Hermite の差を呼び出し側に漏らさないため。

登録対象は「4 つの制御値 → 4 係数 (a, b, c, d)」を返す関数のみ。
"""

from __future__ import annotations

import inspect
from typing import Any, Callable

from common.types import Coefficients

BasisFn = Callable[[float, float, float, float], Coefficients]

_bases: dict[str, BasisFn] = {}

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def basis(fn: Any) -> BasisFn:
    """係数ソルバ関数を関数名で登録するデコレータ。

    例外:
    - TypeError: 関数でない、または位置引数がちょうど 4 個でない場合。
    - ValueError: 同名の別関数が既に登録されている場合。
    """
    if not inspect.isfunction(fn):
        raise TypeError(f"@basis は関数のみ登録可能です: got {fn!r}")
    params = inspect.signature(fn).parameters.values()
    n_pos = sum(1 for p in params if p.kind in _POSITIONAL)
    if n_pos != 4 or any(p.kind not in _POSITIONAL for p in params):
        raise TypeError(f"@basis は 4 個の制御値を取る関数が必要です: got {fn.__name__}{inspect.signature(fn)}")
    key = fn.__name__.lower()
    if key in _bases and _bases[key] is not fn:
        raise ValueError(f"基底 '{key}' は既に登録されています")
    _bases[key] = fn
    return fn


def get_basis(name: str) -> BasisFn:
    """登録された係数ソルバを取得（未登録は KeyError）。"""
    try:
        return _bases[name.lower()]
    except KeyError:
        raise KeyError(f"未登録の基底: {name!r}（登録済み: {sorted(_bases)}）") from None


__all__ = ["BasisFn", "basis", "get_basis"]
