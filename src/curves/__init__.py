"""
どこで: `curves` パッケージ（曲線の定義と係数基底）。
何を: パラメトリック・サンプラと 3 次係数ソルバを提供し、基底を import 副作用で登録する。
なぜ: `engine.core.matrix` の曲線平坦化が依存する境界をこのパッケージに集約するため。
"""

from . import coefficients as _register_coefficients  # noqa: F401
from .coefficients import bezier3_coefficients, cubic, hermite3_coefficients
from .parametric import Parametric, parameter_values
from .registry import basis, get_basis

__all__ = [
    "Parametric",
    "parameter_values",
    "bezier3_coefficients",
    "hermite3_coefficients",
    "cubic",
    "basis",
    "get_basis",
]
