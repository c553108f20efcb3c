"""Load candidate records from JSON or YAML files."""

import json
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from vibefeed.config.constants import COMPONENT_FEED
from vibefeed.feed.errors import CandidateLoadError
from vibefeed.ranker.models import RankableItem


logger = structlog.get_logger()

# Accepted spellings for each RankableItem field
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "created_at": ("created_at", "createdAt"),
    "popularity_count": ("popularity_count", "popularityCount", "stars"),
}


def _normalize_record(record: dict[str, object]) -> dict[str, object]:
    """Pick the ranker fields out of a record, whatever their spelling.

    Unrelated keys (titles, authors, ...) are ignored. A nested
    ``_count: {stars: N}`` block is accepted as the popularity count.
    """
    normalized: dict[str, object] = {}
    for field_name, aliases in FIELD_ALIASES.items():
        for alias in aliases:
            if alias in record:
                normalized[field_name] = record[alias]
                break

    counts = record.get("_count")
    if "popularity_count" not in normalized and isinstance(counts, dict):
        if "stars" in counts:
            normalized["popularity_count"] = counts["stars"]

    if isinstance(normalized.get("id"), int):
        normalized["id"] = str(normalized["id"])
    return normalized


def _parse_document(path: Path) -> object:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def load_candidates(path: Path) -> list[RankableItem]:
    """Load candidates from a JSON or YAML document.

    The document is either a list of records or a mapping with an
    ``items`` list. Any other mapping is rejected; an empty document
    yields no candidates.

    Args:
        path: File to read.

    Returns:
        RankableItem list in file order.

    Raises:
        CandidateLoadError: If the file is missing, unreadable, not UTF-8,
            unparsable, shaped wrongly, or holds invalid records.
    """
    log = logger.bind(component=COMPONENT_FEED, file_path=str(path))

    try:
        document = _parse_document(path)
    except FileNotFoundError as e:
        raise CandidateLoadError(str(path), "file not found") from e
    except UnicodeDecodeError as e:
        raise CandidateLoadError(str(path), f"not valid UTF-8: {e}") from e
    except OSError as e:
        raise CandidateLoadError(str(path), f"cannot read file: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CandidateLoadError(str(path), f"parse error: {e}") from e

    # Only an empty document means "no candidates"
    if document is None:
        return _finish(log, [])
    if isinstance(document, dict):
        if "items" not in document:
            raise CandidateLoadError(
                str(path), "expected a list of records or an 'items' list"
            )
        document = document["items"]
    if not isinstance(document, list):
        raise CandidateLoadError(str(path), "expected a list of records")

    items: list[RankableItem] = []
    errors: list[str] = []
    for index, record in enumerate(document):
        if not isinstance(record, dict):
            errors.append(f"[{index}]: record must be a mapping")
            continue
        try:
            items.append(RankableItem.model_validate(_normalize_record(record)))
        except ValidationError as e:
            for err in e.errors():
                loc = ".".join(str(part) for part in err["loc"])
                errors.append(f"[{index}].{loc}: {err['msg']}")

    if errors:
        log.error("candidates_invalid", error_count=len(errors))
        raise CandidateLoadError(
            str(path), f"{len(errors)} invalid record fields", errors
        )

    return _finish(log, items)


def _finish(
    log: structlog.stdlib.BoundLogger, items: list[RankableItem]
) -> list[RankableItem]:
    log.info("candidates_loaded", count=len(items))
    return items
