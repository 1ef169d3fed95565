"""Query helpers shared by the blog, guide and FAQ list endpoints."""
import math

from pymongo import ReturnDocument

from jobboard.jobs.filters import parse_pagination

MAX_CONTENT_LIMIT = 100


def category_filter(query: dict, category) -> None:
    # "All" is the frontend's no-filter tab
    if category and category != "All":
        query["category"] = category


def search_filter(query: dict, search) -> None:
    if search:
        query["$text"] = {"$search": search}


def paginate(collection, query: dict, args, sort: list, default_limit: int, projection: dict = None):
    """Return (items, total, page, total_pages) for one page of `query`."""
    page, limit = parse_pagination(args, default_limit=default_limit, max_limit=MAX_CONTENT_LIMIT)
    skip = (page - 1) * limit

    items = list(collection.find(query, projection).sort(sort).skip(skip).limit(limit))
    total = collection.count_documents(query)
    return items, total, page, math.ceil(total / limit)


def increment_counter(collection, match: dict, field: str):
    """Atomically bump `field` on the matching document; None when nothing matches."""
    return collection.find_one_and_update(
        match,
        {"$inc": {field: 1}},
        return_document=ReturnDocument.AFTER,
    )
