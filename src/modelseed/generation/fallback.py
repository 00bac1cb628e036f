"""Local synthetic records, used when AI generation for a model fails."""

import random
import uuid
from datetime import date
from typing import Any, Callable, Dict, List, Optional
from faker import Faker
from modelseed.ir.schema import FieldDefinition, ModelDefinition
from modelseed.generation.constants import (
    FALLBACK_DATE_RANGE_DAYS,
    FALLBACK_NUMBER_RANGE,
    FALLBACK_TO_MANY_RANGE,
    FALLBACK_UNKNOWN_ENUM,
)


def _new_id() -> str:
    return str(uuid.uuid4())


class FallbackRecordGenerator:
    """Fabricate plausible field values per field type.

    Never calls out to a model and never raises for a well-formed model
    definition; always returns the requested number of records.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        id_factory: Callable[[], str] = _new_id,
    ):
        """
        Initialize the generator.

        Args:
            seed: Optional random seed for reproducible values
            id_factory: Produces record IDs, and stand-in reference IDs when
                the referenced model has none
        """
        self.rng = random.Random(seed)
        self.fake = Faker()
        if seed is not None:
            self.fake.seed_instance(seed)
        self.id_factory = id_factory

    def generate(
        self,
        model: ModelDefinition,
        record_id_map: Dict[str, List[str]],
        count: int,
    ) -> List[Dict[str, Any]]:
        """
        Generate ``count`` records for a model.

        Args:
            model: Model definition
            record_id_map: Generated IDs by model name
            count: Number of records

        Returns:
            List of records, each with a fresh ``id``
        """
        records = []
        for i in range(count):
            record: Dict[str, Any] = {"id": self.id_factory()}
            for field in model.fields:
                if field.name == "id":
                    continue
                record[field.name] = self.field_value(field, i + 1, record_id_map)
            records.append(record)
        return records

    def field_value(
        self,
        field: FieldDefinition,
        ordinal: int,
        record_id_map: Dict[str, List[str]],
    ) -> Any:
        """Value for one field of the ``ordinal``-th record (1-based)."""
        if field.type == "text":
            return f"Sample {field.name} {ordinal}"
        if field.type == "number":
            return self.rng.randint(*FALLBACK_NUMBER_RANGE)
        if field.type == "boolean":
            return self.rng.random() > 0.5
        if field.type == "date":
            value: date = self.fake.date_between(
                start_date=f"-{FALLBACK_DATE_RANGE_DAYS}d", end_date="today"
            )
            return value.isoformat()
        if field.type == "enum":
            if field.enum_values:
                return self.rng.choice(field.enum_values)
            return FALLBACK_UNKNOWN_ENUM
        if field.type == "reference":
            available_ids = record_id_map.get(field.references_model or "", [])
            if field.ref_type == "to_one":
                return self._pick_reference(available_ids)
            ref_count = self.rng.randint(*FALLBACK_TO_MANY_RANGE)
            return [self._pick_reference(available_ids) for _ in range(ref_count)]
        return f"Sample value {ordinal}"

    def _pick_reference(self, available_ids: List[str]) -> str:
        if available_ids:
            return self.rng.choice(available_ids)
        return self.id_factory()


def generate_fallback_records(
    model: ModelDefinition,
    record_id_map: Dict[str, List[str]],
    count: int,
    seed: Optional[int] = None,
    id_factory: Callable[[], str] = _new_id,
) -> List[Dict[str, Any]]:
    """Generate ``count`` synthetic records for a model without an LLM."""
    generator = FallbackRecordGenerator(seed=seed, id_factory=id_factory)
    return generator.generate(model, record_id_map, count)
