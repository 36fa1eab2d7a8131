"""
Request models — JSON payloads for a partitioning run.

Accepts camelCase (linearActive, groupSize) or snake_case keys.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from culture_kernel.constants import FLEXIBLE
from culture_kernel.domain_types import (
    CulturalProfile,
    Framework,
    HallScores,
    HofstedeScores,
    LewisScores,
    Participant,
)

Score = Annotated[float, Field(ge=0.0, le=1.0)]


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LewisPayload(_Payload):
    linear_active: Score
    multi_active: Score
    reactive: Score


class HallPayload(_Payload):
    context_high: Score
    time_polychronic: Score
    space_private: Score


class HofstedePayload(_Payload):
    power_distance: Score
    individualism: Score
    masculinity: Score
    uncertainty_avoidance: Score
    long_term_orientation: Score
    indulgence: Score


class ParticipantPayload(_Payload):
    id: str = Field(min_length=1)
    country_code: Optional[str] = None
    lewis: Optional[LewisPayload] = None
    hall: Optional[HallPayload] = None
    hofstede: Optional[HofstedePayload] = None

    def to_participant(self) -> Participant:
        profile = CulturalProfile(
            lewis=LewisScores(**self.lewis.model_dump()) if self.lewis else None,
            hall=HallScores(**self.hall.model_dump()) if self.hall else None,
            hofstede=HofstedeScores(**self.hofstede.model_dump()) if self.hofstede else None,
        )
        return Participant(self.id, profile)


class PartitionRequest(_Payload):
    participants: List[ParticipantPayload]
    framework: Framework = Framework.HOFSTEDE
    group_size: Union[Literal[3, 4], Literal["flexible"], None] = None
    seed: Optional[str] = None

    @field_validator("participants")
    @classmethod
    def _unique_ids(cls, value: List[ParticipantPayload]) -> List[ParticipantPayload]:
        seen = set()
        for p in value:
            if p.id in seen:
                raise ValueError(f"Duplicate participant id {p.id!r}")
            seen.add(p.id)
        return value

    def to_participants(self) -> List[Participant]:
        return [p.to_participant() for p in self.participants]

    def labels(self) -> dict:
        """participant id → country code (or id when unknown)."""
        return {p.id: p.country_code or p.id for p in self.participants}

    def resolved_group_size(self) -> Union[int, str]:
        return FLEXIBLE if self.group_size is None else self.group_size
