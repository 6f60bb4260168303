"""lutinterp パッケージ。

1 次元数値テーブルのユーティリティ（linspace / argsort / 並べ替え / diff / interp1）と、
それらを使って LUT を構築する推定器を再エクスポートする。
利用者は基本的に `from lutinterp import interp1` の形で import できる。
"""

from .differences import diff
from .errors import IndexOutOfRange, InvalidArgument, LutError, ShapeMismatch, TypeMismatch
from .interpolation import interp1
from .lut import LookupTableBuilder
from .ramp import linspace
from .sorting import argsort, reorder_columns, reorder_rows

__all__ = [
    "IndexOutOfRange",
    "InvalidArgument",
    "LookupTableBuilder",
    "LutError",
    "ShapeMismatch",
    "TypeMismatch",
    "argsort",
    "diff",
    "interp1",
    "linspace",
    "reorder_columns",
    "reorder_rows",
]
