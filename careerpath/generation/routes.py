# careerpath/generation/routes.py
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request
from pydantic import ValidationError

from careerpath.settings import settings
from careerpath.agents.errors import RequestShapeError
from careerpath.agents.goal_refiner import refine_goal
from careerpath.agents.invoker import ResilientInvoker
from careerpath.agents.llm.client import get_invoker
from careerpath.agents.schemas import GoalRequest, RoadmapRequest
from careerpath.agents.workflow import generate_roadmap

logger = logging.getLogger(__name__)

router = APIRouter()

VALID_SHAPES = (
    "Send either {goal, duration} to refine a goal, "
    "or {refinedGoal, duration} to generate a roadmap for an approved goal. "
    "Optional: temperature between 0 and 1."
)


def parse_generation_request(payload: Dict[str, Any]) -> GoalRequest | RoadmapRequest:
    """Decide which flow a body belongs to; refinedGoal wins over goal."""
    if not isinstance(payload, dict):
        raise RequestShapeError(VALID_SHAPES)

    try:
        if payload.get("refinedGoal") is not None:
            return RoadmapRequest.model_validate(payload)
        if payload.get("goal") is not None:
            return GoalRequest.model_validate(payload)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise RequestShapeError(f"{VALID_SHAPES} ({problems})") from e

    raise RequestShapeError(VALID_SHAPES)


@router.post("/api/roadmap")
def roadmap_generator(
    request: Request,
    payload: Dict[str, Any] = Body(...),
    invoker: ResilientInvoker = Depends(get_invoker),
):
    request_id = request.state.request_id
    req = parse_generation_request(payload)

    if isinstance(req, GoalRequest):
        logger.info("request_id=%s flow=refine duration=%r", request_id, req.duration)
        outcome = refine_goal(
            invoker,
            req.goal,
            req.duration,
            temperature=req.temperature,
            request_id=request_id,
            prefilter=settings.VAGUE_GOAL_PREFILTER,
        )
        return {
            "step": 2,
            "action": outcome.action,
            "data": outcome.model_dump(mode="json", by_alias=True, exclude={"action"}),
            "requestId": request_id,
        }

    logger.info("request_id=%s flow=roadmap duration=%r", request_id, req.duration)
    result = generate_roadmap(
        invoker,
        req.refined_goal,
        req.duration,
        temperature=req.temperature,
        conversion_temperature=settings.CONVERSION_TEMPERATURE,
        request_id=request_id,
    )
    return {
        "success": True,
        "data": result.model_dump(mode="json", by_alias=True),
        "requestId": request_id,
    }
