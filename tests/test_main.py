import csv
import json

import pytest

from metascan import main as cli


def test_parse_args_defaults():
    args = cli.parse_args([])
    assert str(args.dir) == "."
    assert args.output == "file_metadata_report"
    assert args.format == "csv"
    assert not args.recursive
    assert args.ext == ""


def test_format_is_case_insensitive():
    assert cli.parse_args(["--format", "JSON"]).format == "json"


def test_main_recursive_with_filter(tmp_path):
    src = tmp_path / "src"
    (src / "deep").mkdir(parents=True)
    (src / "top.JPG").write_bytes(b"fake")
    (src / "deep" / "inner.jpg").write_bytes(b"fake too")
    (src / "skip.txt").write_text("skip")
    base = tmp_path / "scan"

    cli.main(["--dir", str(src), "--output", str(base), "-r", "--ext", ".jpg",
              "--format", "json", "--no-progress"])

    records = json.loads((tmp_path / "scan.json").read_text(encoding="utf-8"))
    assert sorted(r["FileName"] for r in records) == ["inner.jpg", "top.JPG"]

    manifest = json.loads((tmp_path / "scan-manifest.json").read_text(encoding="utf-8"))
    assert manifest["output_format"] == "json"
    assert manifest["total_attempted"] == 2
    assert manifest["total_processed"] == 2
    assert len(manifest["output_file_hashes"]["md5"]) == 32


def test_main_csv_default(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.txt").write_text("a")
    base = tmp_path / "scan"

    cli.main(["--dir", str(src), "--output", str(base), "--no-progress"])

    with open(tmp_path / "scan.csv", newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 1
    assert rows[0]["FileName"] == "a.txt"
    assert rows[0]["GoogleMapsLink"] == ""


def test_main_missing_dir_exits_nonzero(tmp_path):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--dir", str(tmp_path / "missing"), "--output", str(tmp_path / "x"), "--no-progress"])
    assert exc.value.code == 1
