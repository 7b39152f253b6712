import json
from pathlib import Path

import pytest

from src.metricloci.errors import MetricConfigError
from src.run_locus import main

SMALL_DOMAIN = ["--min", "-3", "--step", "0.1", "--max", "3"]


def test_circle_png_with_metadata(tmp_path: Path) -> None:
    out = tmp_path / "circle.png"
    main(
        [
            "--figure",
            "circle",
            "--metric",
            "taxicab",
            "--center",
            "0",
            "0",
            "--radius",
            "2",
            "--output",
            str(out),
            "--metadata",
            *SMALL_DOMAIN,
        ]
    )
    assert out.exists()
    meta = json.loads(out.with_suffix(".json").read_text(encoding="utf-8"))
    assert meta["figure"] == "circle"
    assert meta["metric"] == "taxicab"
    assert meta["accepted"] > 0
    assert meta["domain"]["eps"] == pytest.approx(0.1)
    assert meta["params"]["center"] == [0.0, 0.0]


def test_ellipse_svg(tmp_path: Path) -> None:
    out = tmp_path / "ellipse.svg"
    main(
        [
            "--figure",
            "ellipse",
            "--metric",
            "pnorm",
            "--p",
            "3",
            "--focus1",
            "1",
            "0",
            "--focus2",
            "-1",
            "0",
            "--sum",
            "4",
            "--eps",
            "0.05",
            "--output",
            str(out),
            *SMALL_DOMAIN,
        ]
    )
    assert "<circle" in out.read_text(encoding="utf-8")


def test_contour_png(tmp_path: Path) -> None:
    out = tmp_path / "contour.png"
    main(
        [
            "--figure",
            "contour",
            "--metric",
            "radial_arc",
            "--reference",
            "2",
            "0",
            "--n",
            "25",
            "--output",
            str(out),
        ]
    )
    assert out.exists()


def test_timeout_cancels_without_saving(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    out = tmp_path / "parabola.png"
    main(
        [
            "--figure",
            "parabola",
            "--timeout",
            "1e-9",
            "--output",
            str(out),
            *SMALL_DOMAIN,
        ]
    )
    assert not out.exists()
    assert "cancelled" in capsys.readouterr().out


def test_pnorm_requires_exponent(tmp_path: Path) -> None:
    with pytest.raises(MetricConfigError):
        main(
            [
                "--figure",
                "contour",
                "--metric",
                "pnorm",
                "--output",
                str(tmp_path / "x.png"),
            ]
        )


def test_exponent_rejected_for_other_metrics(tmp_path: Path) -> None:
    out = tmp_path / "x.png"
    with pytest.raises(MetricConfigError):
        main(
            [
                "--figure",
                "contour",
                "--metric",
                "taxicab",
                "--p",
                "3",
                "--output",
                str(out),
            ]
        )
    assert not out.exists()
