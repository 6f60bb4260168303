"""等間隔ランプ（linspace）の生成。"""

from __future__ import annotations

import numbers
from typing import Any

import numpy as np

from .errors import InvalidArgument
from .types import check_dtype


def linspace(x0: float, x1: float, n: int, dtype: Any = np.float32) -> np.ndarray:
    """x0 から x1 までを n 点で等分した列ベクトルを返す。

    要素 i は x0 + i * (x1 - x0) / (n - 1)。刻み幅は倍精度で計算し、
    各要素を dtype（既定は 32 bit 浮動小数）へ格納する。

    Args:
        x0: 始点。
        x1: 終点（含む）。
        n: 点数。2 以上の整数。
        dtype: 出力の要素型。浮動小数の対応型のみ。

    Returns:
        形状 (n, 1) の配列。

    Raises:
        InvalidArgument: n が 2 未満・整数でない、または dtype が浮動小数でない場合。
    """

    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidArgument(f"n must be an integer, got {n!r}")
    if n < 2:
        raise InvalidArgument(f"linspace requires n >= 2, got {n}")
    resolved = check_dtype(dtype)
    if not np.issubdtype(resolved, np.floating):
        raise InvalidArgument(f"linspace requires a floating dtype, got {resolved}")

    step = (float(x1) - float(x0)) / (int(n) - 1)
    points = float(x0) + np.arange(int(n), dtype=np.float64) * step
    return points.astype(resolved).reshape(-1, 1)
