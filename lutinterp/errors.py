"""テーブル操作で送出する例外の定義。

方針:
    - すべての前提条件チェックは各関数の冒頭で行い、違反はここで定義する例外として
      呼び出し側へそのまま伝播させる（内部でのリトライ・ログ出力・握りつぶしはしない）。
    - 組み込み例外（ValueError など）も継承しておき、従来どおり
      `except ValueError` で受けるコードとも両立させる。

注意:
    重複した標本点によるゼロ除算などの数値的な境界ケースは例外ではない。
    浮動小数では inf/NaN がそのまま結果に現れる。
"""

from __future__ import annotations


class LutError(Exception):
    """lutinterp が送出する例外の基底クラス。"""


class InvalidArgument(LutError, ValueError):
    """次元・要素数・要素型などの引数が前提を満たさない。"""


class ShapeMismatch(LutError, ValueError):
    """対になるテーブル同士（X と Y、テーブルと置換など）の形状が一致しない。"""


class IndexOutOfRange(LutError, IndexError):
    """置換（permutation）の要素が対象テーブルの範囲外を指している。"""


class TypeMismatch(LutError, TypeError):
    """X, Y, XI の要素型が揃っていない。"""
