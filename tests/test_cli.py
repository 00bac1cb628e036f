"""Tests for the typer CLI."""

import json

import pandas as pd
import pytest
from typer.testing import CliRunner

from modelseed.cli import app as cli_app

runner = CliRunner()

SCHEMA = {
    "agent": {"name": "Clinic", "description": "Veterinary practice"},
    "models": [
        {
            "name": "Owner",
            "fields": [
                {"name": "name", "title": "Name", "type": "text"},
                {
                    "name": "pets",
                    "type": "reference",
                    "referencesModel": "Pet",
                    "referencesField": "id",
                    "referenceType": "to_many",
                },
            ],
            "displayFields": ["name"],
        },
        {
            "name": "Pet",
            "fields": [
                {"name": "name", "type": "text"},
                {"name": "species", "type": "enum", "enumValues": ["dog", "cat"]},
                {"name": "owner", "type": "reference", "referencesModel": "Owner", "referenceType": "to_one"},
            ],
        },
    ],
    "actions": [],
    "schedules": [],
}


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "agent.json"
    path.write_text(json.dumps(SCHEMA), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def offline(monkeypatch):
    """Every LLM call fails, so records come from the fallback generator."""

    def unavailable(prompt, schema):
        raise RuntimeError("no provider configured")

    monkeypatch.setattr("modelseed.generation.record_generator.generate_structured", unavailable)
    monkeypatch.setattr(cli_app, "setup_logging", lambda: None)


def test_generate_writes_records_and_csvs(schema_file, tmp_path):
    out_dir = tmp_path / "out"
    result = runner.invoke(
        cli_app.app, ["generate", str(schema_file), str(out_dir), "--count", "3", "--csv", "--seed", "1"]
    )

    assert result.exit_code == 0, result.output
    assert "Owner: 3 records" in result.output
    assert "Pet: 3 records" in result.output
    assert "✓ Complete!" in result.output

    records = json.loads((out_dir / "records.json").read_text(encoding="utf-8"))
    owner_ids = {o["id"] for o in records["Owner"]}
    assert all(p["owner"] in owner_ids for p in records["Pet"])

    pets = pd.read_csv(out_dir / "Pet.csv")
    assert list(pets.columns) == ["id", "name", "species", "owner"]
    assert len(pets) == 3
    owners = pd.read_csv(out_dir / "Owner.csv")
    assert list(owners.columns) == ["id", "name", "pets"]


def test_order_prints_edges_and_generation_order(schema_file):
    result = runner.invoke(cli_app.app, ["order", str(schema_file)])

    assert result.exit_code == 0, result.output
    assert "Pet -> Owner via pets (to_many)" in result.output
    assert "Pet -> Owner via owner (to_one)" in result.output
    assert "1. Owner" in result.output
    assert "2. Pet" in result.output


def test_check_clean_schema(schema_file):
    result = runner.invoke(cli_app.app, ["check", str(schema_file)])
    assert result.exit_code == 0
    assert "No issues found" in result.output


def test_check_reports_issues(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(
        json.dumps({"models": [{"name": "Pet", "fields": [{"name": "owner", "type": "reference", "referencesModel": "Ghost"}]}]}),
        encoding="utf-8",
    )
    result = runner.invoke(cli_app.app, ["check", str(path)])
    assert result.exit_code == 1
    assert "[REF_MODEL_MISSING]" in result.output


def test_missing_schema_file(tmp_path):
    result = runner.invoke(cli_app.app, ["order", str(tmp_path / "nope.json")])
    assert result.exit_code == 1
    assert "Schema file not found" in result.output
