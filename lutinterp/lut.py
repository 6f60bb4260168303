"""アンカー点からルックアップテーブル（LUT）を構築する推定器（sklearn 風 API）。

カラーマップ LUT の典型的な作り方に対応する:
    - いくつかの位置 (positions) で各チャネル値 (values) を与える
    - [domain[0], domain[1]] を n_entries 点に等分したランプを作る
    - チャネルごとに interp1 で補間し、必要ならチャネル順を並べ替える（例: RGB -> BGR）

設計:
    ハイパーパラメータは __init__ 引数として保存するだけにし、
    構築結果は fit 後属性（末尾 '_'）として保持する。
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .differences import diff
from .errors import InvalidArgument, ShapeMismatch
from .interpolation import interp1
from .ramp import linspace
from .sorting import reorder_columns
from .types import ArrayLike, as_table, check_dtype


class LookupTableBuilder:
    """アンカー点の区分線形補間で等間隔 LUT を作る。

    主要ハイパーパラメータ:
        - n_entries: LUT の要素数（2 以上）
        - domain: ランプの範囲 (start, stop)
        - dtype: 計算と出力の要素型（浮動小数を想定）
        - channel_order: 出力のチャネル順（入力チャネルの置換）。None はそのまま
        - channel_names: 出力チャネルの名前。None は "c0", "c1", ...
    """

    def __init__(
        self,
        n_entries: int = 256,
        domain: Tuple[float, float] = (0.0, 1.0),
        dtype: str = "float32",
        channel_order: Optional[Sequence[int]] = None,
        channel_names: Optional[Sequence[str]] = None,
    ) -> None:
        self.n_entries = n_entries
        self.domain = domain
        self.dtype = dtype
        self.channel_order = channel_order
        self.channel_names = channel_names

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "LookupTableBuilder":
        """設定辞書から構築する。"stops" セクションは無視する（stops_from_config を参照）。

        Raises:
            TypeError: config が __init__ 引数と整合しない場合（余計なキーなど）。
        """

        config_dict = dict(config)
        config_dict.pop("stops", None)
        domain = config_dict.pop("domain", (0.0, 1.0))
        return cls(domain=tuple(domain), **config_dict)

    def fit(self, positions: ArrayLike, values: ArrayLike) -> "LookupTableBuilder":
        """アンカー点から LUT を構築する。

        Args:
            positions: アンカー位置。1 次元または列ベクトル。並び順は任意。
            values: 形状 (len(positions), channels) のチャネル値。1 次元は 1 チャネル。

        Returns:
            self。

        Raises:
            InvalidArgument: n_entries/dtype/channel_order などが不正な場合。
            ShapeMismatch: positions と values の行数が合わない場合。
        """

        dtype = check_dtype(self.dtype)
        x = as_table(np.asarray(positions, dtype=dtype))
        y = as_table(np.asarray(values, dtype=dtype))
        if x.shape[1] != 1:
            x = x.reshape(-1, 1)
        if y.shape[0] != x.shape[0]:
            raise ShapeMismatch(
                f"values must have one row per position: {y.shape[0]} != {x.shape[0]}"
            )

        n_channels = int(y.shape[1])
        order = self._resolve_channel_order(n_channels)
        names = self._resolve_channel_names(n_channels)
        start, stop = self._resolve_domain()

        ramp = linspace(start, stop, self.n_entries, dtype=dtype)
        columns = [interp1(x, y[:, [c]], ramp) for c in range(n_channels)]
        table = reorder_columns(np.hstack(columns), order)

        self.n_channels_ = n_channels
        self.channel_order_ = order
        self.channel_names_ = names
        self.positions_ = x
        self.values_ = y
        self.ramp_ = ramp
        self.table_ = table
        self.steps_ = np.column_stack([diff(table[:, [c]]) for c in range(n_channels)])
        return self

    def transform(self, x: ArrayLike) -> np.ndarray:
        """任意のクエリ位置を、学習済みアンカーに対して補間する。

        Returns:
            形状 (m, channels) の配列（チャネル順は channel_order_ に従う）。
        """

        self._check_is_fitted()
        dtype = self.table_.dtype
        query = np.asarray(x, dtype=dtype).reshape(-1, 1)
        columns = [
            interp1(self.positions_, self.values_[:, [c]], query)
            for c in range(self.n_channels_)
        ]
        return reorder_columns(np.hstack(columns), self.channel_order_)

    def to_uint8(self) -> np.ndarray:
        """[0, 1] の LUT を [0, 255] の uint8 LUT に変換する。"""

        self._check_is_fitted()
        scaled = np.rint(self.table_.astype(np.float64) * 255.0)
        return np.clip(scaled, 0, 255).astype(np.uint8)

    def to_frame(self) -> pd.DataFrame:
        """ランプ位置をインデックス、チャネルを列とする DataFrame を返す。"""

        self._check_is_fitted()
        index = pd.Index(self.ramp_[:, 0], name="position")
        return pd.DataFrame(self.table_, index=index, columns=list(self.channel_names_))

    def summary(self) -> Dict[str, Any]:
        """CLI 表示・ロギング用の要約（各チャネルの範囲と最大ステップ幅）。"""

        self._check_is_fitted()
        start, stop = self._resolve_domain()
        channels: Dict[str, Any] = {}
        for c, name in enumerate(self.channel_names_):
            column = self.table_[:, c]
            channels[name] = {
                "min": float(np.min(column)),
                "max": float(np.max(column)),
                "max_abs_step": float(np.max(np.abs(self.steps_[:, c]))),
            }
        return {
            "n_entries": int(self.table_.shape[0]),
            "n_anchors": int(self.positions_.shape[0]),
            "domain": [start, stop],
            "dtype": str(self.table_.dtype),
            "channels": channels,
        }

    def _resolve_domain(self) -> Tuple[float, float]:
        domain = tuple(self.domain)
        if len(domain) != 2:
            raise InvalidArgument(f"domain must be (start, stop), got {self.domain!r}")
        return float(domain[0]), float(domain[1])

    def _resolve_channel_order(self, n_channels: int) -> np.ndarray:
        if self.channel_order is None:
            return np.arange(n_channels, dtype=np.intp)
        order = np.asarray(self.channel_order)
        if order.ndim != 1 or sorted(order.tolist()) != list(range(n_channels)):
            raise InvalidArgument(
                f"channel_order must be a permutation of range({n_channels}), "
                f"got {self.channel_order!r}"
            )
        return order.astype(np.intp)

    def _resolve_channel_names(self, n_channels: int) -> Tuple[str, ...]:
        if self.channel_names is None:
            return tuple(f"c{c}" for c in range(n_channels))
        names = tuple(str(name) for name in self.channel_names)
        if len(names) != n_channels:
            raise InvalidArgument(
                f"channel_names has {len(names)} entries for {n_channels} channels"
            )
        return names

    def _check_is_fitted(self) -> None:
        if not hasattr(self, "table_"):
            raise RuntimeError("LookupTableBuilder is not fitted yet. Call fit() first.")
