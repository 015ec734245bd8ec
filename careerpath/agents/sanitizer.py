## Sanitizing and validating provider output
import logging
import re
from typing import List

from pydantic import TypeAdapter, ValidationError

from careerpath.agents.errors import RoadmapValidationError
from careerpath.agents.schemas import RoadmapItem

logger = logging.getLogger(__name__)

_OPEN_FENCE = re.compile(r"^```[a-zA-Z0-9_-]*[ \t]*\n?")
_CLOSE_FENCE = re.compile(r"\n?```\s*$")

_roadmap_adapter = TypeAdapter(List[RoadmapItem])


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ``` / ```json fence, if any."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _OPEN_FENCE.sub("", cleaned, count=1)
        cleaned = _CLOSE_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def _to_roadmap_error(e: ValidationError, cleaned: str) -> RoadmapValidationError:
    err = e.errors()[0]
    loc = err["loc"]

    if err["type"] == "json_invalid":
        preview = cleaned[:200] + ("..." if len(cleaned) > 200 else "")
        logger.error("Failed to parse roadmap JSON: %s content=%r", err["msg"], preview)
        return RoadmapValidationError(f"Failed to parse roadmap JSON: {err['msg']}")
    if not loc:
        return RoadmapValidationError("Response is not an array")

    index = loc[0]
    if len(loc) == 1:
        return RoadmapValidationError(f"Item {index} is not an object", index=index)
    return RoadmapValidationError(
        f"Item {index} missing or invalid {loc[1]}: {err['msg']}", index=index
    )


def parse_roadmap_items(text: str) -> List[RoadmapItem]:
    """
    Strictly parse the conversion stage output into milestones.

    Raises RoadmapValidationError on malformed JSON, a non-list payload or the
    first item with a missing or mistyped field. Nothing is coerced.
    """
    cleaned = strip_code_fences(text)
    try:
        return _roadmap_adapter.validate_json(cleaned, strict=True)
    except ValidationError as e:
        raise _to_roadmap_error(e, cleaned) from e
