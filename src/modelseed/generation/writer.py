"""File writers for generated records."""

import json
import time
from pathlib import Path
from typing import Any, Dict, List
import pandas as pd
from modelseed.ir.schema import ModelDefinition
from modelseed.generation.error_logging import log_error
from modelseed.config.logging import get_logger

logger = get_logger(__name__)


def records_to_frame(model: ModelDefinition, records: List[Dict[str, Any]]) -> pd.DataFrame:
    """
    Build a DataFrame of a model's records.

    Columns are ``id`` followed by the model's fields in declaration order;
    list values (to-many references) are JSON-encoded.
    """
    columns = ["id"] + [f.name for f in model.fields if f.name != "id"]
    rows = [
        {
            col: json.dumps(record.get(col)) if isinstance(record.get(col), list) else record.get(col)
            for col in columns
        }
        for record in records
    ]
    return pd.DataFrame(rows, columns=columns)


def write_csv(df: pd.DataFrame, path: Path) -> None:
    """
    Write a single DataFrame to CSV.

    Args:
        df: DataFrame to write
        path: Output file path
    """
    write_start = time.time()
    try:
        df.to_csv(path, index=False)
    except Exception as e:
        log_error(
            error=e,
            context={
                "rows": len(df),
                "columns": len(df.columns),
                "file_path": str(path),
                "parent_dir_exists": path.parent.exists(),
            },
            operation="writing CSV file",
        )
        raise
    logger.info(
        f"Wrote {len(df):,} rows, {len(df.columns)} columns to {path} "
        f"in {time.time() - write_start:.3f}s"
    )


def write_model_csvs(
    models: List[ModelDefinition],
    records_by_model: Dict[str, List[Dict[str, Any]]],
    out_dir: Path,
) -> Dict[str, Path]:
    """
    Write one CSV per model.

    Args:
        models: Model definitions
        records_by_model: Generated records by model name
        out_dir: Output directory

    Returns:
        Dictionary mapping model names to file paths
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    files: Dict[str, Path] = {}
    for model in models:
        path = out_dir / f"{model.name}.csv"
        write_csv(records_to_frame(model, records_by_model.get(model.name, [])), path)
        files[model.name] = path
    return files
