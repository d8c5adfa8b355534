from enum import Enum

class ReviewStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @property
    def rank(self) -> int:
        """Position in the forward-only status order."""
        return _STATUS_ORDER.index(self)

class VersionState(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    STAGED = "staged"    # Import still writing its tree

class TaxonomySourceType(str, Enum):
    SPREADSHEET = "spreadsheet"  # Imported from the shared CUJ sheet
    JSON = "json"
    MANUAL = "manual"

class ScoreScale(str, Enum):
    FOUR_POINT = "four_point"    # Internal canonical scale, 0-4
    PERCENT = "percent"          # Display scale, 0-100

class Criterion(str, Enum):
    USABILITY = "usability"
    VISUALS = "visuals"
    RESPONSIVENESS = "responsiveness"
    WRITING = "writing"
    EMOTIONAL = "emotional"


_STATUS_ORDER = [ReviewStatus.PENDING, ReviewStatus.IN_PROGRESS, ReviewStatus.COMPLETED]
