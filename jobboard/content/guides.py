# guides.py
from flask import Blueprint, jsonify, request
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from jobboard.content.listing import category_filter, increment_counter, paginate, search_filter
from jobboard.db import GUIDES, get_collection
from jobboard.log import get_logger

log = get_logger(__name__)

guides_bp = Blueprint("guides_bp", __name__, url_prefix="/api/guides")


@guides_bp.route("/test", methods=["GET"])
def guides_test():
    return jsonify({"message": "Guides routes are working!"})


@guides_bp.route("", methods=["GET"])
def list_guides():
    query = {}
    category_filter(query, request.args.get("category"))
    if request.args.get("difficulty"):
        query["difficulty"] = request.args["difficulty"]
    if request.args.get("featured") == "true":
        query["featured"] = True
    search_filter(query, request.args.get("search"))

    try:
        guides, total, page, total_pages = paginate(
            get_collection(GUIDES),
            query,
            request.args,
            sort=[("featured", DESCENDING), ("createdAt", DESCENDING)],
            default_limit=10,
            projection={"content": 0},
        )
    except PyMongoError:
        log.exception("❌ Error fetching guides")
        return jsonify({"message": "Error fetching guides"}), 500

    return jsonify({"guides": guides, "total": total, "page": page, "totalPages": total_pages})


@guides_bp.route("/featured", methods=["GET"])
def featured_guide():
    try:
        guide = get_collection(GUIDES).find_one({"featured": True}, sort=[("createdAt", DESCENDING)])
    except PyMongoError:
        log.exception("❌ Error fetching featured guide")
        return jsonify({"message": "Error fetching featured guide"}), 500
    return jsonify(guide)


@guides_bp.route("/categories/list", methods=["GET"])
def guide_categories():
    try:
        return jsonify(get_collection(GUIDES).distinct("category"))
    except PyMongoError:
        log.exception("❌ Error fetching guide categories")
        return jsonify({"message": "Error fetching categories"}), 500


@guides_bp.route("/difficulties/list", methods=["GET"])
def guide_difficulties():
    try:
        return jsonify(get_collection(GUIDES).distinct("difficulty"))
    except PyMongoError:
        log.exception("❌ Error fetching guide difficulties")
        return jsonify({"message": "Error fetching difficulties"}), 500


@guides_bp.route("/<slug>", methods=["GET"])
def get_guide(slug):
    """Serving a guide counts as a download."""
    try:
        guide = increment_counter(get_collection(GUIDES), {"slug": slug}, "downloads")
    except PyMongoError:
        log.exception("❌ Error fetching guide %s", slug)
        return jsonify({"message": "Error fetching guide"}), 500

    if guide is None:
        return jsonify({"message": "Guide not found"}), 404
    return jsonify(guide)
