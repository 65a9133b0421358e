"""CLI orchestration integration tests."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

from click.testing import CliRunner
from mongo_shape.cli import cli, main

_SAMPLES_DIR = Path(__file__).resolve().parents[3] / "samples"


def _copy_sample(tmp_path: Path, name: str) -> Path:
    destination = tmp_path / name
    shutil.copyfile(_SAMPLES_DIR / name, destination)
    return destination


def _write_json(path: Path, payload: dict) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_generate_config_command_writes_placeholder_file_with_default_name(
    tmp_path: Path,
) -> None:
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=str(tmp_path)):
        result = runner.invoke(cli, ["generate-config"])
        output_path = Path("model.yaml").resolve()

        assert result.exit_code == 0
        assert output_path.exists()
        content = output_path.read_text(encoding="utf-8")
        assert "model:" in content
        assert "schema:" in content
        assert str(output_path) in result.output


def test_generate_config_command_refuses_to_overwrite(tmp_path: Path, capsys) -> None:
    output_path = tmp_path / "model.yaml"
    output_path.write_text("existing", encoding="utf-8")

    exit_code = main(["generate-config", "--output", str(output_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "already exists" in captured.err
    assert output_path.read_text(encoding="utf-8") == "existing"


def test_check_schema_accepts_sample_model(tmp_path: Path) -> None:
    config_path = _copy_sample(tmp_path, "sample-model.yaml")

    result = CliRunner().invoke(cli, ["check-schema", "--config", str(config_path)])

    assert result.exit_code == 0
    assert result.output.strip() == "ok"


def test_check_schema_lists_every_issue(tmp_path: Path, capsys) -> None:
    config_path = tmp_path / "model.yaml"
    config_path.write_text(
        """
model:
  name: jobs
schema:
  _id:
    type: object_id
    optional: true
  callback: function
  steps:
    type: array
    items:
      type: array
      items: future
""",
        encoding="utf-8",
    )

    exit_code = main(["check-schema", "--config", str(config_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert captured.err.splitlines() == [
        "Invalid schema for model 'jobs'",
        "  _id: The '_id' field must not be an 'optional' type.",
        "  callback: Schema type 'function' is not allowed.",
        "  steps.<idx>.<idx>: Schema type 'future' is not allowed.",
    ]


def test_list_paths_prints_one_path_per_line(tmp_path: Path) -> None:
    config_path = _copy_sample(tmp_path, "sample-model.yaml")

    result = CliRunner().invoke(cli, ["list-paths", "--config", str(config_path)])

    assert result.exit_code == 0
    paths = result.output.splitlines()
    assert paths[:4] == ["_id", "customer", "status", "placed_at"]
    assert "lines.<idx>.gift_wrap" in paths
    assert "shipping.zip" in paths


def test_validate_prints_document_with_defaults(tmp_path: Path) -> None:
    config_path = _copy_sample(tmp_path, "sample-model.yaml")
    input_path = _copy_sample(tmp_path, "sample-order.json")

    result = CliRunner().invoke(
        cli, ["validate", "--config", str(config_path), "--input", str(input_path)]
    )

    assert result.exit_code == 0
    printed = json.loads(result.output)
    assert printed["status"] == "open"
    assert printed["_id"] == {"$oid": "65f0c0ffee0000000000beef"}
    assert printed["lines"][1]["gift_wrap"] is True


def test_validate_reports_issues(tmp_path: Path, capsys) -> None:
    config_path = _copy_sample(tmp_path, "sample-model.yaml")
    input_path = _write_json(tmp_path / "order.json", {"customer": 7, "extra": True})

    exit_code = main(["validate", "--config", str(config_path), "--input", str(input_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Model 'orders' validation failed" in captured.err
    assert "  customer: Expected string, received int." in captured.err
    assert "  <root>: Unrecognized key 'extra'." in captured.err


def test_validate_partial_checks_only_supplied_fields(tmp_path: Path) -> None:
    config_path = _copy_sample(tmp_path, "sample-model.yaml")
    input_path = _write_json(tmp_path / "patch.json", {"customer": "Bea"})

    result = CliRunner().invoke(
        cli,
        ["validate", "--config", str(config_path), "--input", str(input_path), "--partial"],
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == {"customer": "Bea"}


def test_build_update_prints_set_and_unset_operators(tmp_path: Path) -> None:
    config_path = _copy_sample(tmp_path, "sample-model.yaml")
    input_path = _copy_sample(tmp_path, "sample-update.json")

    result = CliRunner().invoke(
        cli, ["build-update", "--config", str(config_path), "--input", str(input_path)]
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "$set": {
            "status": "shipped",
            "lines": [{"sku": "A-1", "qty": 2, "cost": 9.5}],
            "shipping": {"city": "Oslo", "zip": None},
        },
        "$unset": {"coupon": "", "lines.0.gift_wrap": ""},
    }


def test_build_update_honours_custom_missing_token(tmp_path: Path) -> None:
    config_path = _copy_sample(tmp_path, "sample-model.yaml")
    input_path = _write_json(tmp_path / "patch.json", {"coupon": "<drop>", "status": "$missing"})

    result = CliRunner().invoke(
        cli,
        [
            "build-update",
            "--config",
            str(config_path),
            "--input",
            str(input_path),
            "--missing-token",
            "<drop>",
        ],
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "$set": {"status": "$missing"},
        "$unset": {"coupon": ""},
    }


def test_build_update_rejects_identifier(tmp_path: Path, capsys) -> None:
    config_path = _copy_sample(tmp_path, "sample-model.yaml")
    input_path = _write_json(
        tmp_path / "patch.json", {"_id": {"$oid": "65f0c0ffee0000000000beef"}}
    )

    exit_code = main(["build-update", "--config", str(config_path), "--input", str(input_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "The '_id' field is not allowed" in captured.err


def test_hide_fields_checks_and_hides_fetched_document(tmp_path: Path) -> None:
    config_path = _copy_sample(tmp_path, "sample-model.yaml")
    input_path = _copy_sample(tmp_path, "sample-order.json")

    result = CliRunner().invoke(
        cli, ["hide-fields", "--config", str(config_path), "--input", str(input_path)]
    )

    assert result.exit_code == 0
    printed = json.loads(result.output)
    assert "internal_note" not in printed
    assert [line.get("cost") for line in printed["lines"]] == [None, None]
    assert printed["lines"][0] == {"sku": "A-1", "qty": 2}


def test_verbose_flag_enables_debug_logging(tmp_path: Path, caplog) -> None:
    config_path = _copy_sample(tmp_path, "sample-model.yaml")
    input_path = _copy_sample(tmp_path, "sample-update.json")

    with caplog.at_level("DEBUG", logger="mongo_shape"):
        exit_code = main(
            [
                "--verbose",
                "build-update",
                "--config",
                str(config_path),
                "--input",
                str(input_path),
            ]
        )

    assert exit_code == 0
    assert "Update operators for model 'orders'" in caplog.text
