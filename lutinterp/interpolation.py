"""並び順を問わない標本テーブル (X, Y) に対する区分線形補間 interp1。

処理の流れ:
    1. argsort で X の昇順インデックスを求め、reorder_rows で X と Y を同じ順序に並べ替える。
    2. 各クエリ点 xq について二分探索で挟み込み区間 [low, high] (high = low + 1) を求める。
       テーブル範囲外の点は端の区間を使って線形外挿する（クリップはしない）。
    3. 区間の直線式で値を評価する。

二分探索はクエリ点ごとの逐次ループと同じ規則を、numpy のマスク演算で全点まとめて進める。
NaN のクエリは比較がすべて偽になるため、ループの規則どおり先頭区間に落ちる。
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .errors import InvalidArgument, ShapeMismatch, TypeMismatch
from .sorting import argsort, reorder_rows
from .types import ArrayLike, as_table, check_dtype, is_integer_dtype, to_array


def interp1(X: ArrayLike, Y: ArrayLike, XI: ArrayLike) -> np.ndarray:
    """標本 (X, Y) から XI における線形補間値を返す。

    Args:
        X: 標本点の列ベクトル (n, 1)。昇順である必要はなく、重複も許す。
        Y: X と同じ形状・要素型の列ベクトル。
        XI: クエリ点。任意形状（行優先で読み出す）。

    Returns:
        XI と同じ形状・要素型の配列。

    Raises:
        TypeMismatch: X, Y, XI の要素型が揃っていない場合。
        ShapeMismatch: X が列ベクトルでない、または X と Y の形状が異なる場合。
        InvalidArgument: 標本が 2 点未満、または要素型が未対応の場合。

    注意:
        重複した X によって分母が 0 になる場合も例外にはしない。
        浮動小数では inf/NaN、整数では商 0（下側の標本値）となる。
    """

    # 型の不一致は、要素型が対応しているかどうかより先に判定する。
    x_arr = to_array(X)
    y_arr = to_array(Y)
    xi_arr = to_array(XI)
    if not (x_arr.dtype == y_arr.dtype == xi_arr.dtype):
        raise TypeMismatch(
            "X and Y and XI must be of same type "
            f"(got {x_arr.dtype}, {y_arr.dtype}, {xi_arr.dtype})"
        )
    check_dtype(x_arr.dtype)

    x_table = as_table(x_arr)
    y_table = as_table(y_arr)
    if x_table.shape[1] != 1:
        raise ShapeMismatch(f"X must be a column vector, got shape {x_table.shape}")
    if x_table.shape != y_table.shape:
        raise ShapeMismatch(
            f"X and Y must be well-aligned, got {x_table.shape} and {y_table.shape}"
        )
    if x_table.shape[0] < 2:
        raise InvalidArgument("at least two samples required")
    dtype = x_table.dtype

    # X の昇順に標本テーブルを並べ替える。
    order = argsort(x_table, ascending=True)
    xs = reorder_rows(x_table, order)[:, 0]
    ys = reorder_rows(y_table, order)[:, 0]

    xq = xi_arr.reshape(-1)
    low, high = _bracket(xs, xq)
    result = _evaluate(xs, ys, xq, low, high, dtype)
    return result.reshape(xi_arr.shape)


def _bracket(xs: np.ndarray, xq: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """昇順の xs に対し、各クエリの挟み込み区間 (low, high) を二分探索で求める。"""

    m = xq.shape[0]
    low = np.zeros(m, dtype=np.intp)
    high = np.full(m, xs.shape[0] - 1, dtype=np.intp)

    # 範囲外は端の区間に固定する（先頭区間/末尾区間で外挿）。
    high[xq < xs[low]] = 1
    above = xq > xs[high]
    low[above] = high[above] - 1

    active = (high - low) > 1
    while np.any(active):
        mid = low + ((high - low) >> 1)
        go_right = xq > xs[mid]
        low = np.where(active & go_right, mid, low)
        high = np.where(active & ~go_right, mid, high)
        active = (high - low) > 1
    return low, high


def _evaluate(
    xs: np.ndarray,
    ys: np.ndarray,
    xq: np.ndarray,
    low: np.ndarray,
    high: np.ndarray,
    dtype: np.dtype,
) -> np.ndarray:
    """y = ys[low] + (xq - xs[low]) * (ys[high] - ys[low]) / (xs[high] - xs[low])。"""

    if not is_integer_dtype(dtype):
        # 要素型のまま計算する（float32 を float64 に広げない）。
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            numerator = (xq - xs[low]) * (ys[high] - ys[low])
            return (ys[low] + numerator / (xs[high] - xs[low])).astype(dtype, copy=False)

    # 整数は Python の多倍長整数（object 配列）で計算し、0 方向への切り捨て除算を行う。
    # int32 の全域でも積 (xq - xs[low]) * (ys[high] - ys[low]) が桁あふれしない。
    x_low = xs[low].astype(object)
    x_high = xs[high].astype(object)
    y_low = ys[low].astype(object)
    y_high = ys[high].astype(object)
    query = xq.astype(object)

    numerator = (query - x_low) * (y_high - y_low)
    denominator = x_high - x_low
    zero = (denominator == 0).astype(bool)
    safe = np.where(zero, 1, denominator)
    quotient = np.abs(numerator) // np.abs(safe)
    negative = (numerator < 0).astype(bool) != (safe < 0).astype(bool)
    quotient = np.where(negative, -quotient, quotient)
    quotient = np.where(zero, 0, quotient)

    # 要素型へ戻す際は範囲外を wrap-around させる（2 の補数での格納と同じ）。
    info = np.iinfo(dtype)
    span = 1 << info.bits
    wrapped = (y_low + quotient - info.min) % span + info.min
    return wrapped.astype(dtype)
