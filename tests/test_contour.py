import math

import numpy as np
import pytest

from src.metricloci.contour import evaluate_field
from src.metricloci.errors import DomainError
from src.metricloci.metrics import euclidean, los_angeles


def test_default_grid_shape_and_range() -> None:
    field = evaluate_field(euclidean, (0.0, 0.0))
    assert field.values.shape == (100, 100)
    assert field.xs[0] == -5.0
    assert field.xs[-1] == 5.0
    np.testing.assert_array_equal(field.xs, field.ys)


def test_euclidean_field_zero_at_reference_and_rotation_symmetric() -> None:
    field = evaluate_field(euclidean, (0.0, 0.0), n=101)
    assert field.xs[50] == pytest.approx(0.0, abs=1e-12)
    assert field.values[50, 50] == pytest.approx(0.0, abs=1e-12)
    np.testing.assert_allclose(field.values, np.rot90(field.values), atol=1e-9)


def test_rows_follow_y() -> None:
    field = evaluate_field(lambda a, b: b[1], (0.0, 0.0), n=11)
    np.testing.assert_allclose(field.values[:, 0], field.ys)
    np.testing.assert_allclose(field.values[0, :], np.full(11, field.ys[0]))


def test_los_angeles_field_is_anisotropic() -> None:
    field = evaluate_field(los_angeles, (1.0, 1.0), n=101)
    assert not np.allclose(field.values, np.rot90(field.values))


def test_non_finite_values_pass_through() -> None:
    def left_undefined(a: tuple[float, float], b: tuple[float, float]) -> float:
        return math.nan if b[0] < 0 else euclidean(a, b)

    field = evaluate_field(left_undefined, (0.0, 0.0), n=10)
    left = field.xs < 0
    assert bool(np.all(np.isnan(field.values[:, left])))
    assert bool(np.all(np.isfinite(field.values[:, ~left])))


def test_reference_order_is_metric_first_argument() -> None:
    field = evaluate_field(lambda a, b: a[0], (2.0, 0.0), n=5)
    np.testing.assert_allclose(field.values, np.full((5, 5), 2.0))
    assert field.reference == (2.0, 0.0)


@pytest.mark.parametrize(
    ("lo", "hi", "n"), [(1.0, -1.0, 10), (0.0, 0.0, 10), (-1.0, 1.0, 1)]
)
def test_invalid_grid_rejected(lo: float, hi: float, n: int) -> None:
    with pytest.raises(DomainError):
        evaluate_field(euclidean, (0.0, 0.0), lo=lo, hi=hi, n=n)
