"""Agent schema models: data models, fields, and the automation that uses them."""

from typing import List, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field

FieldType = Literal[
    "text",
    "number",
    "boolean",
    "date",
    "enum",
    "reference",
]

ReferenceType = Literal["to_one", "to_many"]


class _SchemaModel(BaseModel):
    """Base for schema models; accepts both snake_case and camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())


class FieldDefinition(_SchemaModel):
    """One attribute of a data model."""

    name: str
    title: Optional[str] = None
    type: Optional[FieldType] = "text"
    required: bool = False
    description: Optional[str] = None  # Used verbatim in generation prompts
    enum_values: List[str] = Field(default_factory=list, alias="enumValues")
    references_model: Optional[str] = Field(default=None, alias="referencesModel")
    references_field: Optional[str] = Field(default=None, alias="referencesField")
    reference_type: Optional[ReferenceType] = Field(default=None, alias="referenceType")

    @property
    def label(self) -> str:
        return self.title or self.name

    @property
    def is_reference(self) -> bool:
        """True for reference fields that name a target model."""
        return self.type == "reference" and bool(self.references_model)

    @property
    def ref_type(self) -> ReferenceType:
        """Reference cardinality; unspecified references are to-one."""
        return self.reference_type or "to_one"


class ModelDefinition(_SchemaModel):
    """A named entity schema."""

    name: str
    fields: List[FieldDefinition] = Field(default_factory=list)
    display_fields: List[str] = Field(default_factory=list, alias="displayFields")

    def reference_fields(self) -> List[FieldDefinition]:
        """Reference fields with a target model, in declaration order."""
        return [f for f in self.fields if f.is_reference]

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        return next((f for f in self.fields if f.name == name), None)


class DependencyEdge(_SchemaModel):
    """Directed generation dependency between two models."""

    dependent: str
    depends_on: str = Field(alias="dependsOn")
    field: str
    type: ReferenceType


class ActionStep(_SchemaModel):
    """A single step of an automation action."""

    name: str
    type: Optional[str] = None
    input_fields: List[str] = Field(default_factory=list, alias="inputFields")
    output_fields: List[str] = Field(default_factory=list, alias="outputFields")


class AgentAction(_SchemaModel):
    """An automation action that reads and writes records of one model."""

    name: str
    description: Optional[str] = None
    target_model: Optional[str] = Field(default=None, alias="targetModel")
    steps: List[ActionStep] = Field(default_factory=list)


class ScheduleStep(_SchemaModel):
    """Schedule step: query records of a model, then run an action on them."""

    model_name: Optional[str] = Field(default=None, alias="modelName")
    action_name: Optional[str] = Field(default=None, alias="actionName")


class Schedule(_SchemaModel):
    """A one-time or recurring schedule of action runs."""

    name: str
    mode: Literal["once", "recurring"] = "recurring"
    interval_hours: Optional[float] = Field(default=None, alias="intervalHours")
    status: str = "active"
    steps: List[ScheduleStep] = Field(default_factory=list)


class AgentInfo(_SchemaModel):
    """Owning agent metadata used to give generation prompts a context."""

    name: str = "Agent"
    description: Optional[str] = None


class AgentSchema(_SchemaModel):
    """Everything needed for one generation run."""

    agent: AgentInfo = Field(default_factory=AgentInfo)
    models: List[ModelDefinition] = Field(default_factory=list)
    actions: List[AgentAction] = Field(default_factory=list)
    schedules: List[Schedule] = Field(default_factory=list)
