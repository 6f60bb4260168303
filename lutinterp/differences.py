"""1 次元シーケンスの一階差分。"""

from __future__ import annotations

import numpy as np

from .errors import InvalidArgument
from .types import ArrayLike, as_array, is_1d, is_integer_dtype


def diff(seq: ArrayLike) -> np.ndarray:
    """隣接要素の差 output[i] = seq[i+1] - seq[i] を返す。

    向き（1 次元/行/列）は入力と同じ。整数型では要素型の範囲で飽和させる
    （uint8 で 3 - 5 は 0 になる）。浮動小数は通常の IEEE 演算に従う。

    Raises:
        InvalidArgument: seq が 1 次元でない、または空の場合。
    """

    values = as_array(seq)
    if not is_1d(values):
        raise InvalidArgument("diff only supports 1D sequences")
    if values.size == 0:
        raise InvalidArgument("diff requires at least one element")

    # 1 次元の広がりを持つ軸に沿って差を取る。(1, 1) は行として扱う。
    if values.ndim == 1:
        axis = 0
    else:
        axis = 1 if values.shape[0] == 1 else 0

    if not is_integer_dtype(values.dtype):
        return np.diff(values, axis=axis)

    info = np.iinfo(values.dtype)
    wide = np.diff(values.astype(np.int64), axis=axis)
    return np.clip(wide, info.min, info.max).astype(values.dtype)
