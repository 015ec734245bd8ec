## Pydantic schemas for requests, outcomes and roadmaps
from datetime import datetime
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

from careerpath.settings import settings


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)


class GoalRequest(RequestModel):
    goal: str = Field(min_length=1)
    duration: str = Field(min_length=1)
    temperature: float = Field(default_factory=lambda: settings.DEFAULT_TEMPERATURE, ge=0, le=1)


class RoadmapRequest(RequestModel):
    refined_goal: str = Field(min_length=1)
    duration: str = Field(min_length=1)
    temperature: float = Field(default_factory=lambda: settings.DEFAULT_TEMPERATURE, ge=0, le=1)


class ClarifyOutcome(CamelModel):
    action: Literal["clarify"] = "clarify"
    message: str = Field(min_length=1)
    suggestions: List[str] = Field(default_factory=list)
    original_goal: str
    duration: str


class ReviewOutcome(CamelModel):
    action: Literal["review"] = "review"
    refined_goal: str
    original_goal: str
    duration: str


RefinementOutcome = Annotated[Union[ClarifyOutcome, ReviewOutcome], Field(discriminator="action")]


class RoadmapItem(CamelModel):
    title: StrictStr = Field(min_length=1)
    year: StrictInt
    description: StrictStr = Field(min_length=1)


class RoadmapMeta(CamelModel):
    total_milestones: int
    duration: str
    generated_at: datetime


class PipelineResult(CamelModel):
    roadmap: List[RoadmapItem]
    meta: RoadmapMeta
