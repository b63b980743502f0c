"""共通フィクスチャ。

- 乱数シード固定
- 乗算カーネル（numba / numpy ビュー）の切り替え
- 小さな Matrix 試料
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
import pytest

from common import settings
from engine.core.matrix import Matrix


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture(params=[True, False], ids=["numba", "numpy"])
def kernel(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> bool:
    """両方の乗算経路でテストを走らせる。"""
    monkeypatch.setattr(settings.get(), "USE_NUMBA", request.param)
    return request.param


@pytest.fixture()
def env_reload(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """環境変数を書き換えて `reload_from_env()` し、終了時に既定へ戻す。"""
    yield monkeypatch
    monkeypatch.undo()
    settings.reload_from_env()


@pytest.fixture()
def edges_empty() -> Matrix:
    return Matrix(0, 4, [])


@pytest.fixture()
def m2x3() -> Matrix:
    return Matrix(2, 3, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
