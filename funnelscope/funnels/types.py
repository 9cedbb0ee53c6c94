from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class FunnelType(str, Enum):
    WEBINAR = "webinar"
    WEBINAR_TO_CALL = "webinar_to_call"
    DIRECT_CALL = "direct_call"


@dataclass(frozen=True)
class StageDefinition:
    key: str                   # "stage1".."stage4"
    name: str                  # generic label, "Registration"
    default_name: str          # pre-filled display name, "Webinar Registration"
    can_be_paid: bool          # stage may charge a price (paid webinar, paid call)


@dataclass(frozen=True)
class FunnelTypeDefinition:
    id: FunnelType
    name: str                                  # "Webinar Funnel"
    description: str                           # "Registration → Attendance → Sale"
    stages: Tuple[StageDefinition, ...]        # 2-4 stages, in funnel order
    stage3_enabled: bool
    stage4_enabled: bool
    optimization_events: Tuple[str, ...]       # ad-platform checkpoints, in order

    def stage(self, key: str) -> Optional[StageDefinition]:
        for s in self.stages:
            if s.key == key:
                return s
        return None


@dataclass(frozen=True)
class ActiveStage:
    key: str
    name: str                  # prospect override or default_name
    default_name: str
    can_be_paid: bool
