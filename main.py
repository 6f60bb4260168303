"""CLI エントリポイント。

目的:
    設定ファイル（TOML/JSON）のアンカー点から `LookupTableBuilder` で LUT を構築し、
    表示・CSV/JSON 出力・プロットへ接続するためのコマンドライン実行口を提供する。

想定される例外:
    - 設定ファイルが存在しない: FileNotFoundError
    - JSON/TOML の構文エラー: パーサ由来の例外
    - アンカー点の形状や型が不正: lutinterp.errors の例外
"""

import argparse
import json
import os
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

try:
    import matplotlib.pyplot as plt
except ImportError:
    plt = None

from lutinterp.config import load_config, stops_from_config
from lutinterp.logger import WandBLogger, wandb_available
from lutinterp.lut import LookupTableBuilder


def main(argv: Optional[Sequence[str]] = None) -> None:
    """コマンドライン引数を解釈し、LUT を構築して出力する。

    Args:
        argv: 引数リスト。None の場合は `sys.argv` を argparse が参照する。
    """

    parser = argparse.ArgumentParser(description="Lookup table builder")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("lut.toml"),
        help="Path to a TOML or JSON config file with a [stops] section.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Path to write the LUT as CSV (optional).",
    )
    parser.add_argument(
        "--json",
        type=Path,
        default=None,
        help="Path to write result JSON (optional).",
    )
    parser.add_argument(
        "--uint8",
        action="store_true",
        help="Write the 8-bit form of the LUT (values scaled to 0..255).",
    )
    parser.add_argument(
        "--plot",
        action="store_true",
        help="Save channel curves plot (requires matplotlib).",
    )

    args = parser.parse_args(argv)

    # 設定を読み込む。ファイル不在・拡張子非対応・パース失敗は例外として伝播する。
    config = load_config(args.config)
    positions, values, builder_config = stops_from_config(config)

    # WandB ログの準備（任意）。
    wandb_logger = None
    wandb_project = os.getenv("WANDB_PROJECT")
    wandb_enabled = os.getenv("WANDB_ENABLED", "").lower() in {"1", "true", "yes"}
    if wandb_project or wandb_enabled:
        if not wandb_project:
            wandb_project = "lutinterp"
        if wandb_available():
            wandb_logger = WandBLogger(project=wandb_project, name="lut-build")
            wandb_logger.start_run(config={"config": config})
        else:
            print("WandB が利用できないためロギングをスキップします。")

    print("\n=== Run parameters ===")
    print(
        {
            "config_path": str(args.config),
            "output_path": str(args.output) if args.output is not None else None,
            "json_path": str(args.json) if args.json is not None else None,
            "uint8": bool(args.uint8),
            "plot": bool(args.plot),
            "config": builder_config,
        }
    )

    builder = LookupTableBuilder.from_config(builder_config)
    builder.fit(positions, values)

    frame = builder.to_frame()
    if args.uint8:
        frame = pd.DataFrame(
            builder.to_uint8(), index=frame.index, columns=frame.columns
        )

    pd.set_option("display.max_columns", 100)
    print("\n=== Lookup table ===")
    print(frame)
    summary = builder.summary()
    print("\n=== Summary ===")
    print(summary)

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(args.output)
        print(f"Saved LUT CSV to {args.output}")

    if args.plot:
        if plt is None:
            print("matplotlib が利用できないためプロットをスキップします。")
        else:
            fig, ax = plt.subplots(figsize=(8, 4))
            for name in frame.columns:
                ax.plot(frame.index, frame[name], label=name)
            anchors = builder.positions_[:, 0]
            ax.vlines(anchors, *ax.get_ylim(), colors="gray", linestyles=":", alpha=0.6)
            ax.set_xlabel("position")
            ax.set_ylabel("channel value")
            ax.set_title("Interpolated lookup table")
            ax.legend(loc="best", fontsize="small")
            ax.grid(True, linestyle=":", alpha=0.6)
            output_path = Path("lut_channels.png")
            fig.tight_layout()
            fig.savefig(output_path, dpi=150)
            print(f"Saved channel plot to {output_path}")
            plt.show()

    if args.json is not None:
        args.json.parent.mkdir(parents=True, exist_ok=True)
        result = {
            "config_path": str(args.config),
            "summary": summary,
            "positions": frame.index.tolist(),
            "channels": list(frame.columns),
            "table": frame.to_numpy().tolist(),
            "config": config,
        }
        with args.json.open("w", encoding="utf-8") as handle:
            json.dump(result, handle, ensure_ascii=False, indent=2)
        print(f"Saved result JSON to {args.json}")

    if wandb_logger is not None:
        wandb_logger.log_summary(summary)
        wandb_logger.log_table(frame)
        wandb_logger.finish()


if __name__ == "__main__":
    # 直接実行時のみ main() を呼び出す（import された場合に副作用を起こさない）。
    main()
