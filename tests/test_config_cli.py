from __future__ import annotations

import json
import sys
import tempfile
from pathlib import Path

import pandas as pd

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import main as cli
from lutinterp.config import load_config, stops_from_config

CONFIG_TOML = """
n_entries = 5
domain = [0.0, 1.0]
dtype = "float64"
channel_names = ["r", "g", "b"]

[stops]
positions = [0.0, 0.5, 1.0]
values = [[0.0, 0.0, 1.0], [1.0, 1.0, 1.0], [1.0, 0.0, 0.0]]
"""


def expect_raises(exc_type, func, *args, **kwargs) -> None:
    try:
        func(*args, **kwargs)
    except exc_type:
        return
    raise AssertionError(f"{func.__name__} did not raise {exc_type.__name__}")


def test_load_config_formats() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        toml_path = Path(tmp) / "lut.TOML"
        toml_path.write_text(CONFIG_TOML, encoding="utf-8")
        json_path = Path(tmp) / "lut.json"
        json_path.write_text(json.dumps({"n_entries": 3}), encoding="utf-8")

        config = load_config(toml_path)
        if config["n_entries"] != 5 or config["stops"]["positions"] != [0.0, 0.5, 1.0]:
            raise AssertionError(f"TOML config wrong: {config}")
        if load_config(json_path) != {"n_entries": 3}:
            raise AssertionError("JSON config wrong")

        yaml_path = Path(tmp) / "lut.yaml"
        yaml_path.write_text("n_entries: 3", encoding="utf-8")
        expect_raises(ValueError, load_config, yaml_path)
        expect_raises(FileNotFoundError, load_config, Path(tmp) / "missing.toml")


def test_stops_from_config() -> None:
    positions, values, rest = stops_from_config(
        {"n_entries": 3, "stops": {"positions": [0, 1], "values": [1, 2]}}
    )
    if positions != [0, 1] or values != [1, 2] or rest != {"n_entries": 3}:
        raise AssertionError(f"stops split wrong: {positions}, {values}, {rest}")
    expect_raises(ValueError, stops_from_config, {"n_entries": 3})
    expect_raises(ValueError, stops_from_config, {"stops": {"positions": [0, 1]}})


def test_cli_writes_csv_and_json() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        config_path = Path(tmp) / "lut.toml"
        config_path.write_text(CONFIG_TOML, encoding="utf-8")
        csv_path = Path(tmp) / "out" / "lut.csv"
        json_path = Path(tmp) / "out" / "result.json"

        cli.main(
            [
                "--config",
                str(config_path),
                "--output",
                str(csv_path),
                "--json",
                str(json_path),
                "--uint8",
            ]
        )

        frame = pd.read_csv(csv_path, index_col="position")
        if list(frame.columns) != ["r", "g", "b"] or len(frame) != 5:
            raise AssertionError(f"CSV layout wrong:\n{frame}")
        if frame["r"].tolist() != [0, 128, 255, 255, 255]:
            raise AssertionError(f"CSV values wrong: {frame['r'].tolist()}")

        with json_path.open("r", encoding="utf-8") as handle:
            result = json.load(handle)
        if result["summary"]["n_entries"] != 5 or len(result["table"]) != 5:
            raise AssertionError(f"JSON result wrong: {result['summary']}")


def main() -> None:
    test_load_config_formats()
    test_stops_from_config()
    test_cli_writes_csv_and_json()
    print("OK: config/CLI tests passed")


if __name__ == "__main__":
    main()
