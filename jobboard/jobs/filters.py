"""Typed job-list filters and their translation into a MongoDB query."""
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 3
MAX_LIMIT = 100


@dataclass(frozen=True)
class JobFilter:
    search: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    employment_type: Optional[str] = None
    experience_level: Optional[str] = None
    # Raw query-string values; only the literal "true" narrows the result
    is_remote: Optional[str] = None
    is_hybrid: Optional[str] = None
    is_onsite: Optional[str] = None

    @classmethod
    def from_args(cls, args) -> "JobFilter":
        """Build from request.args (or any mapping); empty values count as absent."""
        def get(key):
            return args.get(key) or None

        return cls(
            search=get("search"),
            category=get("category"),
            location=get("location"),
            employment_type=get("employmentType"),
            experience_level=get("experienceLevel"),
            is_remote=get("isRemote"),
            is_hybrid=get("isHybrid"),
            is_onsite=get("isOnsite"),
        )

    def to_query(self) -> dict:
        """Mongo filter document; `isActive: true` is always applied."""
        query = {"isActive": True}

        if self.search:
            query["$text"] = {"$search": self.search}
        if self.category:
            query["category"] = self.category
        if self.location:
            query["location"] = {"$regex": self.location, "$options": "i"}
        if self.employment_type:
            query["employmentType"] = self.employment_type
        if self.experience_level:
            query["experienceLevel"] = self.experience_level

        # "false" or any other value imposes no constraint
        if self.is_remote == "true":
            query["isRemote"] = True
        if self.is_hybrid == "true":
            query["isHybrid"] = True
        if self.is_onsite == "true":
            query["isOnsite"] = True

        return query


def _to_int(raw, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


def parse_pagination(args, default_limit: int = DEFAULT_LIMIT, max_limit: int = MAX_LIMIT) -> Tuple[int, int]:
    """
    Read `page` and `limit` from query args.

    Non-numeric values fall back to the defaults, page < 1 becomes 1,
    limit < 1 becomes the default and limit is capped at max_limit.
    """
    page = _to_int(args.get("page"), DEFAULT_PAGE)
    limit = _to_int(args.get("limit"), default_limit)

    if page < 1:
        page = DEFAULT_PAGE
    if limit < 1:
        limit = default_limit
    if limit > max_limit:
        limit = max_limit
    return page, limit
