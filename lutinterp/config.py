"""設定ファイル（TOML/JSON）を読み込むユーティリティ。

目的:
    LUT の構築条件（要素数・範囲・チャネル順）とアンカー点を設定ファイルに外部化し、
    同じ LUT を再現できるようにする。

想定する構成（TOML）:
    n_entries = 256
    domain = [0.0, 1.0]
    channel_names = ["r", "g", "b"]

    [stops]
    positions = [0.0, 0.5, 1.0]
    values = [[0.0, 0.0, 0.5], [1.0, 1.0, 1.0], [0.5, 0.0, 0.0]]
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Tuple


def load_config(path: Path) -> Dict[str, Any]:
    """設定ファイルを読み込み、Python の辞書として返す。

    Args:
        path: 設定ファイルへのパス。拡張子（大文字小文字は区別しない）でフォーマットを判定する。

    Returns:
        設定内容を表す辞書。

    Raises:
        FileNotFoundError: 指定パスが存在しない場合。
        ValueError: 対応していない拡張子の場合。
        json.JSONDecodeError: JSON のパースに失敗した場合。
        tomllib.TOMLDecodeError: TOML のパースに失敗した場合。
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".toml":
        # tomllib.load はバイナリファイルオブジェクトを要求する。
        with path.open("rb") as handle:
            return tomllib.load(handle)

    if suffix == ".json":
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    raise ValueError(f"Unsupported config format: {path.suffix}")


def stops_from_config(
    config: Dict[str, Any],
) -> Tuple[List[float], List[Any], Dict[str, Any]]:
    """設定からアンカー点を取り出し、(positions, values, 残りの設定) を返す。

    Raises:
        ValueError: stops セクション、または positions/values が無い場合。
    """

    rest = dict(config)
    stops = rest.pop("stops", None)
    if not isinstance(stops, dict):
        raise ValueError("Config must contain a [stops] section.")
    missing = sorted({"positions", "values"} - set(stops))
    if missing:
        raise ValueError(f"Missing keys in [stops]: {missing}")
    return list(stops["positions"]), list(stops["values"]), rest
