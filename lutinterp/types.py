"""型定義と入力の正規化。

NumericSequence / NumericTable はどちらも numpy.ndarray で表現する。
テーブルは 2 次元 (rows, cols)、シーケンスは片方の次元が 1 のテーブル
（または素の 1 次元配列）とみなす。向き（行/列）は呼び出し側の約束であり、状態としては持たない。

要素型の扱い:
    - ndarray など dtype を持つ入力は、その dtype を保ったまま扱う。
      SUPPORTED_DTYPES に含まれない dtype は InvalidArgument。
    - list/tuple/スカラーなど dtype を持たない入力は float64 に変換する。
"""

from __future__ import annotations

from typing import Any, Tuple

import numpy as np

from .errors import InvalidArgument

# ArrayLike:
# - 「配列のように扱える」入力を表す型。
# - ndarray, pandas.Series, list などを受け付けるため Any としておく。
ArrayLike = Any

# 対応する要素型。8/16 bit の符号あり/なし整数、32 bit 符号あり整数、32/64 bit 浮動小数。
SUPPORTED_DTYPES: Tuple[np.dtype, ...] = tuple(
    np.dtype(name)
    for name in ("int8", "uint8", "int16", "uint16", "int32", "float32", "float64")
)


def check_dtype(dtype: Any) -> np.dtype:
    """dtype が対応している要素型かを確認し、np.dtype として返す。"""

    try:
        resolved = np.dtype(dtype)
    except TypeError as exc:
        raise InvalidArgument(f"unsupported element type: {dtype!r}") from exc
    if resolved not in SUPPORTED_DTYPES:
        raise InvalidArgument(f"unsupported element type: {resolved}")
    return resolved


def to_array(values: ArrayLike) -> np.ndarray:
    """dtype を持つ入力はその型のまま、持たない入力は float64 の ndarray にする。

    要素型の検証は行わない（複数入力の型比較を先に行いたい場合に使う）。
    """

    if hasattr(values, "dtype"):
        return np.asarray(values)
    return np.asarray(values, dtype=np.float64)


def as_array(values: ArrayLike) -> np.ndarray:
    """入力を ndarray に正規化する（コピーはしない）。要素型が未対応なら InvalidArgument。"""

    array = to_array(values)
    check_dtype(array.dtype)
    return array


def as_table(values: ArrayLike) -> np.ndarray:
    """入力を 2 次元テーブルに正規化する。

    - 0 次元（スカラー）は (1, 1)
    - 1 次元は列ベクトル (n, 1)
    - 3 次元以上は InvalidArgument
    """

    array = as_array(values)
    if array.ndim == 0:
        return array.reshape(1, 1)
    if array.ndim == 1:
        return array.reshape(-1, 1)
    if array.ndim != 2:
        raise InvalidArgument(f"tables must be 1D or 2D, got ndim={array.ndim}")
    return array


def is_1d(array: np.ndarray) -> bool:
    """配列が「本当に 1 次元」か（1 次元配列、または片方の次元が 1 の 2 次元配列）。"""

    if array.ndim == 1:
        return True
    if array.ndim != 2:
        return False
    rows, cols = array.shape
    return rows == 1 or cols == 1


def is_integer_dtype(dtype: np.dtype) -> bool:
    return np.issubdtype(dtype, np.integer)
