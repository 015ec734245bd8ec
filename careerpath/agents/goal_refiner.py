# careerpath/agents/goal_refiner.py
import json
import logging
import re

from pydantic import TypeAdapter, ValidationError

from careerpath.agents.invoker import ResilientInvoker
from careerpath.agents.sanitizer import strip_code_fences
from careerpath.agents.schemas import ClarifyOutcome, RefinementOutcome, ReviewOutcome

logger = logging.getLogger(__name__)

_outcome_adapter = TypeAdapter(RefinementOutcome)


SYSTEM_GOAL_COACH = """You are a career and education coach.

You must return ONLY valid JSON (no markdown, no code fences, no commentary).
The JSON must match one of the two shapes you are given exactly.
"""


def build_refinement_prompt(goal: str, duration: str) -> str:
    return f"""
A student wants to plan the following goal over {duration}:
"{goal}"

Decide whether the goal is specific enough to plan against.

If it is too vague (no clear field, role or outcome), return:
{{
  "action": "clarify",
  "message": "one or two sentences explaining what is missing",
  "suggestions": ["I want to ...", "I want to ...", "I want to ..."]
}}

If it is specific enough, return:
{{
  "action": "review",
  "refinedGoal": "I want to ..."
}}

Rules:
- "suggestions" must contain exactly 3 rephrased goals, each in first person.
- "refinedGoal" must be a single first-person sentence under 40 words.
- Keep the student's intent; do not invent a different career.
""".strip()


# -------------------------
# Vagueness heuristic
# -------------------------
VAGUE_TERMS = {
    "computers", "computer", "tech", "technology", "business", "science",
    "money", "success", "something", "anything", "stuff", "job", "career",
    "college", "university", "school", "art", "sports", "medicine", "law",
}
FILLER_WORDS = {
    "i", "i'm", "im", "want", "would", "like", "to", "be", "become", "a", "an",
    "the", "in", "into", "on", "of", "for", "do", "get", "go", "study", "learn",
    "work", "with", "and", "or", "my", "me", "some", "good", "better", "more",
}
MIN_GOAL_CHARS = 10


def looks_vague(goal: str) -> bool:
    """Cheap keyword/length check; True means the goal needs clarifying."""
    if len(goal.strip()) < MIN_GOAL_CHARS:
        return True
    words = [w for w in re.findall(r"[\w']+", goal.lower()) if w not in FILLER_WORDS]
    return all(w in VAGUE_TERMS for w in words)


def _prefilter_outcome(goal: str, duration: str) -> ClarifyOutcome:
    topic = goal.strip() or "your interest"
    return ClarifyOutcome(
        message=(
            f'"{topic}" is too broad to plan over {duration}. '
            "Tell us which role, field or outcome you are aiming for."
        ),
        suggestions=[
            f"I want to get a job related to {topic} within {duration}",
            f"I want to earn a degree or certificate in {topic}",
            f"I want to build a portfolio of projects in {topic}",
        ],
        original_goal=goal,
        duration=duration,
    )


# -------------------------
# Decoding
# -------------------------
_QUOTES = "\"'`“”‘’"
_ESCAPES = (("\\\\", "\x00"), ('\\"', '"'), ("\\n", "\n"), ("\\t", "\t"), ("\x00", "\\"))


def clean_refinement_text(raw: str) -> str:
    """Strip fences and enclosing quotes, then un-escape embedded sequences."""
    text = strip_code_fences(raw)
    while len(text) >= 2 and text[0] in _QUOTES and text[-1] in _QUOTES:
        text = text[1:-1].strip()
    for old, new in _ESCAPES:
        text = text.replace(old, new)
    return text.strip()


def _load_object(text: str) -> dict:
    data = json.loads(text, strict=False)
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    if isinstance(data.get("action"), str):
        data["action"] = data["action"].strip().lower()
    return data


def decode_refinement(raw: str, goal: str, duration: str):
    """
    Turn the provider's answer into exactly one outcome.

    Anything that does not decode into a known shape is treated as the refined
    goal itself.
    """
    text = clean_refinement_text(raw)
    try:
        # well-formed JSON must not go through un-escaping
        try:
            data = _load_object(strip_code_fences(raw))
        except ValueError:
            data = _load_object(text)
        outcome = _outcome_adapter.validate_python(
            {**data, "originalGoal": goal, "duration": duration}
        )
    except (ValueError, ValidationError) as e:
        # json.JSONDecodeError is a ValueError
        logger.warning("Refinement output did not decode (%s); using raw text as refined goal", e)
        return ReviewOutcome(refined_goal=text or goal, original_goal=goal, duration=duration)

    if isinstance(outcome, ReviewOutcome) and not outcome.refined_goal.strip():
        return ReviewOutcome(refined_goal=goal, original_goal=goal, duration=duration)
    return outcome


def refine_goal(invoker: ResilientInvoker, goal: str, duration: str, *, temperature: float,
request_id: str | None = None, prefilter: bool = False):
    if prefilter and looks_vague(goal):
        logger.info("request_id=%s goal flagged vague by prefilter, skipping provider", request_id)
        return _prefilter_outcome(goal, duration)

    messages = [
        {"role": "system", "content": SYSTEM_GOAL_COACH},
        {"role": "user", "content": build_refinement_prompt(goal, duration)},
    ]
    raw_text = invoker.invoke(
        messages,
        temperature=temperature,
        response_format={"type": "json_object"},
        request_id=request_id,
    )

    outcome = decode_refinement(raw_text, goal, duration)
    if isinstance(outcome, ClarifyOutcome) and len(outcome.suggestions) != 3:
        logger.warning("request_id=%s expected 3 suggestions, got %d", request_id, len(outcome.suggestions))
    logger.info("request_id=%s goal classified action=%s", request_id, outcome.action)
    return outcome
