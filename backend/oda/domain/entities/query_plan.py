"""Domain entities for search planning and ranking."""

from dataclasses import dataclass, field

from oda.domain.entities.public_data import PublicData


@dataclass(frozen=True)
class QueryPlan:
    """Structured plan produced from a search prompt.

    ``keywords`` is ordered: the first entry is the primary keyword and is
    weighted extra by the relevance scorer. A ``major_category`` of None (or
    the general category) disables category filtering. ``limit`` is None when
    the planner did not suggest one.
    """

    major_category: str | None = None
    keywords: tuple[str, ...] = ()
    limit: int | None = None

    @classmethod
    def build(
        cls,
        major_category: str | None,
        keywords: list[str] | tuple[str, ...],
        limit: int | None = None,
    ) -> "QueryPlan":
        """Normalize raw planner output: trim, drop blanks, keep first occurrence."""
        cleaned: list[str] = []
        for raw in keywords:
            keyword = str(raw).strip()
            if keyword and keyword not in cleaned:
                cleaned.append(keyword)
        category = (major_category or "").strip() or None
        if limit is not None and limit <= 0:
            limit = None
        return cls(major_category=category, keywords=tuple(cleaned), limit=limit)

    @property
    def primary_keyword(self) -> str | None:
        return self.keywords[0] if self.keywords else None


@dataclass
class ScoredCandidate:
    """A dataset paired with its relevance score for one request."""

    record: PublicData
    score: int = 0
    error: Exception | None = None


@dataclass
class KeywordSearchOutcome:
    """Result of searching every field for one keyword."""

    keyword: str
    records: list[PublicData] = field(default_factory=list)
    error: Exception | None = None
    dropped_by_filter: int = 0

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class DeduplicationOutcome:
    """Records reduced to one per name; ``fallback_error`` is set when identity dedup was used."""

    records: list[PublicData] = field(default_factory=list)
    fallback_error: Exception | None = None
