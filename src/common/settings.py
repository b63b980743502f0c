"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: サンプリング刻みや表示精度の既定値を散在させず、テストから差し替え可能にするため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int


@dataclass
class _Settings:
    # 曲線サンプリング刻み（パラメータ t の増分）
    CIRCLE_STEP: float = 0.001
    BEZIER_STEP: float = 0.001
    HERMITE_STEP: float = 0.0001

    # 表示
    DISPLAY_PRECISION: int = 2

    # 乗算カーネル
    USE_NUMBA: bool = True


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - float は `env_float`（正値のみ許容）、int は `env_int`、bool は `env_bool` を使用。
    - 不正値は既定値にフォールバックする。
    """
    _settings.CIRCLE_STEP = env_float("WMX_CIRCLE_STEP", 0.001, positive=True)
    _settings.BEZIER_STEP = env_float("WMX_BEZIER_STEP", 0.001, positive=True)
    _settings.HERMITE_STEP = env_float("WMX_HERMITE_STEP", 0.0001, positive=True)

    _settings.DISPLAY_PRECISION = env_int("WMX_DISPLAY_PRECISION", 2, min_value=0) or 0

    _settings.USE_NUMBA = env_bool("WMX_USE_NUMBA", True)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
