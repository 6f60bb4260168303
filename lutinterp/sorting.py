"""argsort と置換によるテーブルの並べ替え。

置換（permutation）は長さ N の整数インデックス配列で、
「出力の i 行目（列目）は入力の perm[i] 行目（列目）から来る」ことを表す。
並べ替えはインデックス演算のみで行い、範囲外は IndexOutOfRange として明示的に失敗させる。
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .errors import IndexOutOfRange, InvalidArgument, ShapeMismatch
from .types import ArrayLike, as_array, as_table, is_1d


def argsort(seq: ArrayLike, ascending: bool = True) -> np.ndarray:
    """1 次元シーケンスを整列させるインデックス列を返す。

    要素は行優先で読み出し、値で安定ソートする。同値の要素は昇順・降順のどちらでも
    元の相対順序を保つ（後段の reorder_rows で決定的な結果を得るため）。

    Raises:
        InvalidArgument: seq が 1 次元でない場合。
    """

    values = as_array(seq)
    if not is_1d(values):
        raise InvalidArgument("argsort only supports 1D sequences")
    flat = values.reshape(-1)

    if ascending:
        return np.argsort(flat, kind="stable").astype(np.intp, copy=False)

    # 逆順列を安定ソートして反転すると、同値の要素は元の順序に戻る。
    n = flat.shape[0]
    reversed_order = np.argsort(flat[::-1], kind="stable")[::-1]
    return (n - 1 - reversed_order).astype(np.intp, copy=False)


def _check_permutation(perm: ArrayLike, size: int, axis_name: str) -> np.ndarray:
    indices = np.asarray(perm)
    if indices.ndim != 1:
        raise InvalidArgument("permutation must be a 1D sequence of indices")
    if indices.size and not np.issubdtype(indices.dtype, np.integer):
        raise InvalidArgument(
            f"permutation must contain integers, got dtype {indices.dtype}"
        )
    if indices.shape[0] != size:
        raise ShapeMismatch(
            f"permutation length {indices.shape[0]} does not match {size} {axis_name}"
        )
    if indices.size:
        bad = (indices < 0) | (indices >= size)
        if np.any(bad):
            first = int(indices[np.argmax(bad)])
            raise IndexOutOfRange(
                f"permutation index {first} out of range for {size} {axis_name}"
            )
    return indices.astype(np.intp, copy=False)


def _check_out(src: np.ndarray, out: np.ndarray) -> np.ndarray:
    if not isinstance(out, np.ndarray):
        raise InvalidArgument("out must be a numpy.ndarray")
    if out.shape != src.shape:
        raise ShapeMismatch(
            f"out shape {out.shape} does not match source shape {src.shape}"
        )
    if np.shares_memory(out, src):
        raise InvalidArgument("out must not share memory with the source table")
    return out


def reorder_rows(
    src: ArrayLike, perm: ArrayLike, out: Optional[np.ndarray] = None
) -> np.ndarray:
    """出力の i 行目を src の perm[i] 行目とするテーブルを返す。

    Args:
        src: 並べ替え対象のテーブル（1 次元は列ベクトルとみなす）。
        perm: 長さが src の行数と等しいインデックス列。
        out: 書き込み先（任意）。src と同じ形状で、src とメモリを共有しないこと。

    Returns:
        out を与えた場合は out、そうでなければ新しく確保したテーブル。

    Raises:
        ShapeMismatch: perm の長さ、または out の形状が合わない場合。
        IndexOutOfRange: perm に範囲外のインデックスがある場合。
    """

    table = as_table(src)
    indices = _check_permutation(perm, table.shape[0], "rows")
    if out is None:
        return table[indices, :].copy()
    target = _check_out(table, out)
    target[...] = table[indices, :]
    return target


def reorder_columns(
    src: ArrayLike, perm: ArrayLike, out: Optional[np.ndarray] = None
) -> np.ndarray:
    """出力の i 列目を src の perm[i] 列目とするテーブルを返す（reorder_rows の列版）。"""

    table = as_table(src)
    indices = _check_permutation(perm, table.shape[1], "columns")
    if out is None:
        return table[:, indices].copy()
    target = _check_out(table, out)
    target[...] = table[:, indices]
    return target
