from __future__ import annotations

import pytest

from curves import registry
from curves.coefficients import bezier3, hermite3
from curves.registry import basis, get_basis
from engine.core.matrix import Matrix


@pytest.fixture
def isolated_bases(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(registry, "_bases", dict(registry._bases))


def test_builtin_bases_registered() -> None:
    assert get_basis("bezier3") is bezier3
    assert get_basis("Hermite3") is hermite3


def test_registered_basis_drives_add_cubic(isolated_bases: None) -> None:
    @basis
    def linear_test(p0: float, p1: float, _a: float, _b: float) -> tuple[float, float, float, float]:
        return 0.0, 0.0, p1 - p0, p0

    assert get_basis("linear_test") is linear_test
    m = Matrix(0, 4, [])
    m.add_cubic("linear_test", (0.0, 0.0), (2.0, 4.0), (9.0, 9.0), (9.0, 9.0), step=0.5)
    assert m.nrows == 4
    assert m.row_view(3).tolist() == [2.0, 4.0, 0.0, 1.0]


def test_basis_rejects_non_function() -> None:
    class NotFunc:  # noqa: N801 (テスト用の簡易クラス)
        pass

    with pytest.raises(TypeError) as ei:
        basis(NotFunc)
    assert "got" in str(ei.value)


@pytest.mark.parametrize(
    "fn",
    [
        lambda p0, p1, p2: (0.0, 0.0, 0.0, p0),
        lambda p0, p1, p2, p3, p4: (0.0, 0.0, 0.0, p0),
        lambda *ps: (0.0, 0.0, 0.0, ps[0]),
        lambda p0, p1, p2, *, p3: (0.0, 0.0, 0.0, p0),
    ],
)
def test_basis_requires_four_control_values(fn, isolated_bases: None) -> None:
    with pytest.raises(TypeError):
        basis(fn)


def test_duplicate_name_rejected(isolated_bases: None) -> None:
    def bezier3(p0: float, p1: float, p2: float, p3: float):  # noqa: ANN202 - テスト用
        return 0.0, 0.0, 0.0, p0

    with pytest.raises(ValueError):
        basis(bezier3)


def test_unknown_basis_raises_key_error() -> None:
    with pytest.raises(KeyError) as ei:
        get_basis("no_such_basis")
    assert "bezier3" in str(ei.value)
