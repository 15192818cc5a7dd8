"""Domain models for combined link assessment results"""

from dataclasses import dataclass
from typing import Any

from .base import BaseModel
from .coordinates import Endpoint
from .parameters import PathParameters
from .profile import ClearanceResult
from .screening import ScreenResult, Verdict


@dataclass(frozen=True, slots=True, eq=False)
class LinkAssessment(BaseModel):
    """
    Result of screening and (optionally) analysing one home/target pair.

    ``clearance`` is None when the quick screen dropped the pair and no
    terrain profile was requested.
    """

    home: Endpoint
    target: Endpoint
    params: PathParameters
    distance_m: float
    screen: ScreenResult
    clearance: ClearanceResult | None = None

    @property
    def verdict(self) -> Verdict:
        return self.screen.verdict

    def to_dict(self) -> dict[str, Any]:
        data = BaseModel.to_dict(self)
        if self.clearance is None:
            data.pop("clearance")
        return data
