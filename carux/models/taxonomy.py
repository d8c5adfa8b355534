from pydantic import BaseModel, Field, ConfigDict
from uuid import UUID, uuid4
from datetime import datetime, timezone
from typing import Optional, List

from carux.models.enumerations import TaxonomySourceType, VersionState


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(BaseModel):
    """Top-level grouping of journeys (e.g. Navigation, Media)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(default_factory=uuid4)
    version_id: UUID
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    icon: str = Field(default="category", max_length=64)


class Journey(BaseModel):
    """Critical User Journey (CUJ) belonging to one category."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(default_factory=uuid4)
    version_id: UUID
    category_id: UUID
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class Task(BaseModel):
    """Smallest evaluable unit: one scripted action with an expected outcome."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(default_factory=uuid4)
    version_id: UUID
    journey_id: UUID
    name: str = Field(..., min_length=1, max_length=500)
    prerequisites: Optional[str] = None
    expected_outcome: str = Field(..., min_length=1)


class TaskWithCategory(BaseModel):
    """Task resolved through its journey to its category."""

    task: Task
    journey: Journey
    category: Category


class TaxonomyVersionCreate(BaseModel):
    """Payload for registering a new taxonomy snapshot."""

    model_config = ConfigDict(extra="forbid")

    label: str = Field(..., min_length=1, max_length=64, description="e.g. 'v2.0'")
    source_type: TaxonomySourceType = TaxonomySourceType.MANUAL
    source_file_name: Optional[str] = Field(default=None, max_length=255)
    created_by: Optional[UUID] = None
    activate: bool = Field(
        default=False,
        description="Make this the active version (always true for the first version)",
    )


class TaxonomyVersion(BaseModel):
    """Immutable, switchable snapshot of the category/journey/task tree."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(default_factory=uuid4)
    label: str
    source_type: TaxonomySourceType
    source_file_name: Optional[str] = None
    state: VersionState = VersionState.INACTIVE
    created_at: datetime = Field(default_factory=_utcnow)
    created_by: Optional[UUID] = None

    @property
    def is_active(self) -> bool:
        return self.state is VersionState.ACTIVE


# Nested import payload (spreadsheet / JSON sync)

class TaskImport(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=500)
    prerequisites: Optional[str] = None
    expected_outcome: str = Field(..., min_length=1)


class JourneyImport(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    tasks: List[TaskImport] = Field(default_factory=list)


class CategoryImport(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    icon: str = Field(default="category", max_length=64)
    journeys: List[JourneyImport] = Field(default_factory=list)


class TaxonomyImport(BaseModel):
    """Full taxonomy tree plus the version metadata it should be stored under."""

    model_config = ConfigDict(extra="forbid")

    version: TaxonomyVersionCreate
    categories: List[CategoryImport] = Field(..., min_length=1)


class SyncStatus(BaseModel):
    last_sync: Optional[datetime] = None
    status: str = "never_synced"
    version_id: Optional[UUID] = None
