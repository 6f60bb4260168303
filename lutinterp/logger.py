"""WandB ロギング用のユーティリティ。

方針:
    - WandB は任意依存。未インストールでも LUT の構築自体は動作させる。
    - ロギングはテーブル操作から分離し、外側（main 等）で利用する。
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import pandas as pd

_INSTALL_HINT = "wandb is not installed. Run `pip install wandb` or disable WandB logging."


def _load_wandb():
    # 必要になった時点で import する（未インストール環境でも本体は import できる）。
    try:
        return importlib.import_module("wandb")
    except ImportError as exc:
        raise RuntimeError(_INSTALL_HINT) from exc


def wandb_available() -> bool:
    """wandb を import できるかを返す。"""

    try:
        _load_wandb()
    except RuntimeError:
        return False
    return True


def _flatten(payload: Dict[str, Any], prefix: str) -> Dict[str, Any]:
    # 入れ子の dict を "prefix/key/sub" 形式の平坦な dict にする。
    flat: Dict[str, Any] = {}
    for key, value in payload.items():
        name = f"{prefix}/{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(_flatten(value, name))
        else:
            flat[name] = value
    return flat


@dataclass
class WandBLogger:
    """LUT 構築の結果（要約と表）を 1 つの WandB run に記録する。

    enabled=False のときは全メソッドが何もしない。
    """

    project: str
    name: Optional[str] = None
    enabled: bool = True
    _run: Any = field(default=None, init=False, repr=False)

    def start_run(self, config: Optional[Dict[str, Any]] = None) -> None:
        if not self.enabled:
            return
        self._run = _load_wandb().init(project=self.project, name=self.name, config=config)

    def log_summary(self, summary: Dict[str, Any], prefix: str = "summary") -> None:
        """LookupTableBuilder.summary() の結果を平坦化して記録する。"""

        if not self.enabled:
            return
        _load_wandb().log(_flatten(summary, prefix))

    def log_table(self, frame: pd.DataFrame, key: str = "lut") -> None:
        """LUT の DataFrame（インデックスの位置列を含む）を wandb.Table として記録する。"""

        if not self.enabled:
            return
        wandb = _load_wandb()
        wandb.log({key: wandb.Table(dataframe=frame.reset_index())})

    def finish(self) -> None:
        if not self.enabled:
            return
        _load_wandb().finish()
        self._run = None
