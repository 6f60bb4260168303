from __future__ import annotations

import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from lutinterp.errors import InvalidArgument, ShapeMismatch
from lutinterp.lut import LookupTableBuilder


def expect_raises(exc_type, func, *args, **kwargs) -> None:
    try:
        func(*args, **kwargs)
    except exc_type:
        return
    raise AssertionError(f"{func.__name__} did not raise {exc_type.__name__}")


# 並び順を崩したアンカー点（位置 0 で青、0.5 で白、1 で赤）。
POSITIONS = [1.0, 0.0, 0.5]
VALUES = [[1.0, 0.0, 0.0], [0.0, 0.0, 1.0], [1.0, 1.0, 1.0]]


def fitted_builder() -> LookupTableBuilder:
    builder = LookupTableBuilder(
        n_entries=5,
        domain=(0.0, 1.0),
        dtype="float64",
        channel_order=[2, 1, 0],
        channel_names=["b", "g", "r"],
    )
    return builder.fit(POSITIONS, VALUES)


def test_fit_builds_reordered_table() -> None:
    builder = fitted_builder()
    expected = np.array(
        [
            [1.0, 0.0, 0.0],
            [1.0, 0.5, 0.5],
            [1.0, 1.0, 1.0],
            [0.5, 0.5, 1.0],
            [0.0, 0.0, 1.0],
        ]
    )
    if builder.table_.shape != (5, 3) or not np.allclose(builder.table_, expected):
        raise AssertionError(f"unexpected LUT:\n{builder.table_}")
    if not np.allclose(builder.ramp_.ravel(), [0.0, 0.25, 0.5, 0.75, 1.0]):
        raise AssertionError(f"unexpected ramp: {builder.ramp_.ravel()}")
    if builder.steps_.shape != (4, 3) or not np.allclose(builder.steps_[:, 2], [0.5, 0.5, 0.0, 0.0]):
        raise AssertionError(f"unexpected steps:\n{builder.steps_}")


def test_transform_uint8_frame_and_summary() -> None:
    builder = fitted_builder()
    out = builder.transform([0.25])
    if not np.allclose(out, [[1.0, 0.5, 0.5]]):
        raise AssertionError(f"transform wrong: {out}")
    lut8 = builder.to_uint8()
    if lut8.dtype != np.uint8 or lut8[:, 2].tolist() != [0, 128, 255, 255, 255]:
        raise AssertionError(f"uint8 LUT wrong:\n{lut8}")
    frame = builder.to_frame()
    if list(frame.columns) != ["b", "g", "r"] or frame.index.name != "position":
        raise AssertionError(f"frame layout wrong: {frame.columns}, {frame.index.name}")
    summary = builder.summary()
    if summary["n_entries"] != 5 or summary["n_anchors"] != 3:
        raise AssertionError(f"summary counts wrong: {summary}")
    if abs(summary["channels"]["r"]["max_abs_step"] - 0.5) > 1e-12:
        raise AssertionError(f"summary step wrong: {summary['channels']['r']}")


def test_default_float32_single_channel() -> None:
    builder = LookupTableBuilder(n_entries=3).fit([0.0, 1.0], [2.0, 4.0])
    if builder.table_.dtype != np.float32 or builder.channel_names_ != ("c0",):
        raise AssertionError(f"defaults wrong: {builder.table_.dtype}, {builder.channel_names_}")
    if not np.allclose(builder.table_.ravel(), [2.0, 3.0, 4.0]):
        raise AssertionError(f"single channel LUT wrong: {builder.table_.ravel()}")


def test_from_config_ignores_stops() -> None:
    config = {
        "n_entries": 4,
        "domain": [0.0, 2.0],
        "channel_names": ["v"],
        "stops": {"positions": [0.0, 2.0], "values": [0.0, 1.0]},
    }
    builder = LookupTableBuilder.from_config(config)
    if builder.n_entries != 4 or builder.domain != (0.0, 2.0):
        raise AssertionError(f"from_config wrong: {builder.n_entries}, {builder.domain}")
    expect_raises(TypeError, LookupTableBuilder.from_config, {"unknown": 1})


def test_invalid_settings_fail() -> None:
    expect_raises(RuntimeError, LookupTableBuilder().transform, [0.5])
    expect_raises(InvalidArgument, LookupTableBuilder(n_entries=1).fit, [0.0, 1.0], [0.0, 1.0])
    expect_raises(InvalidArgument, LookupTableBuilder(channel_order=[0, 0, 1]).fit, POSITIONS, VALUES)
    expect_raises(InvalidArgument, LookupTableBuilder(channel_names=["a"]).fit, POSITIONS, VALUES)
    expect_raises(InvalidArgument, LookupTableBuilder(dtype="int64").fit, POSITIONS, VALUES)
    expect_raises(ShapeMismatch, LookupTableBuilder().fit, [0.0, 1.0], VALUES)


def main() -> None:
    test_fit_builds_reordered_table()
    test_transform_uint8_frame_and_summary()
    test_default_float32_single_channel()
    test_from_config_ignores_stops()
    test_invalid_settings_fail()
    print("OK: LookupTableBuilder tests passed")


if __name__ == "__main__":
    main()
