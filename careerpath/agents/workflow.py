# careerpath/agents/workflow.py
import logging
from datetime import datetime, timezone

from careerpath.agents.errors import ProviderExhaustedError, StageFailedError
from careerpath.agents.invoker import ResilientInvoker
from careerpath.agents.sanitizer import parse_roadmap_items
from careerpath.agents.schemas import PipelineResult, RoadmapMeta

logger = logging.getLogger(__name__)

MIN_MILESTONES = 5
MAX_MILESTONES = 7


SYSTEM_PLANNER = """You are an academic and career planner for high school and college students.
Write practical, concrete plans. Use plain text with short headings and bullet points.
"""

SYSTEM_CONVERTER = """You convert career plans into structured data.

You must return ONLY valid JSON (no markdown, no code fences, no commentary).
The JSON must match the given schema exactly.
"""


def build_outline_prompt(refined_goal: str, duration: str) -> str:
    return f"""
Goal: {refined_goal}
Time horizon: {duration}

Write a high-level outline for reaching this goal, split into exactly 4 phases.
For each phase give:
- a short phase title
- the approximate time span within {duration}
- 2-4 key objectives
""".strip()


def build_detailed_prompt(refined_goal: str, duration: str, outline: str) -> str:
    return f"""
Goal: {refined_goal}
Time horizon: {duration}

Here is the 4-phase outline agreed for this goal:
{outline}

Expand the outline into a detailed roadmap. For every phase list:
- concrete actions (courses, projects, certifications, applications)
- skills to build
- a measurable milestone that marks the phase as done
Keep the phases in the same order and within {duration}.
""".strip()


def build_conversion_prompt(detailed_roadmap: str, duration: str, start_year: int) -> str:
    return f"""
Convert the following roadmap (time horizon: {duration}) into milestones.

Roadmap:
{detailed_roadmap}

Output must be a STRICT JSON array matching this schema:
[
  {{"title": "string", "year": {start_year}, "description": "string"}}
]

Rules:
- Between {MIN_MILESTONES} and {MAX_MILESTONES} items, in chronological order.
- "year" is a calendar year as an integer, starting from {start_year}.
- "title" is concise; "description" is 1-3 sentences of what to do.
- No trailing commas, no extra keys.
""".strip()


def _run_stage(invoker: ResilientInvoker, stage: str, system: str, user: str, *,
temperature: float, request_id: str | None) -> str:
    logger.info("request_id=%s stage=%s starting", request_id, stage)
    messages = [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]
    try:
        text = invoker.invoke(messages, temperature=temperature, request_id=request_id)
    except ProviderExhaustedError as e:
        logger.error("request_id=%s stage=%s failed: %s", request_id, stage, e)
        raise StageFailedError(stage, request_id, e) from e
    logger.info("request_id=%s stage=%s done chars=%d", request_id, stage, len(text))
    return text


def generate_roadmap(invoker: ResilientInvoker, refined_goal: str, duration: str, *,
temperature: float, conversion_temperature: float, request_id: str | None = None) -> PipelineResult:
    """
    Outline -> detailed roadmap -> JSON milestones, strictly in sequence.

    Each stage's prompt embeds the previous stage's text, so a failure anywhere
    aborts the run. The conversion output is validated strictly by
    parse_roadmap_items; RoadmapValidationError propagates unchanged.
    """
    outline = _run_stage(
        invoker, "outline", SYSTEM_PLANNER,
        build_outline_prompt(refined_goal, duration),
        temperature=temperature, request_id=request_id,
    )

    detailed = _run_stage(
        invoker, "detailed", SYSTEM_PLANNER,
        build_detailed_prompt(refined_goal, duration, outline),
        temperature=temperature, request_id=request_id,
    )

    start_year = datetime.now(timezone.utc).year
    converted = _run_stage(
        invoker, "conversion", SYSTEM_CONVERTER,
        build_conversion_prompt(detailed, duration, start_year),
        temperature=min(temperature, conversion_temperature), request_id=request_id,
    )

    roadmap = parse_roadmap_items(converted)
    if not MIN_MILESTONES <= len(roadmap) <= MAX_MILESTONES:
        logger.warning(
            "request_id=%s expected %d-%d milestones, got %d",
            request_id, MIN_MILESTONES, MAX_MILESTONES, len(roadmap),
        )

    logger.info("request_id=%s generated roadmap with %d milestones", request_id, len(roadmap))
    return PipelineResult(
        roadmap=roadmap,
        meta=RoadmapMeta(
            total_milestones=len(roadmap),
            duration=duration,
            generated_at=datetime.now(timezone.utc),
        ),
    )
