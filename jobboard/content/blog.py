# blog.py
from flask import Blueprint, jsonify, request
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from jobboard.content.listing import category_filter, increment_counter, paginate, search_filter
from jobboard.db import BLOG_POSTS, get_collection
from jobboard.log import get_logger

log = get_logger(__name__)

blog_bp = Blueprint("blog_bp", __name__, url_prefix="/api/blog")


@blog_bp.route("/test", methods=["GET"])
def blog_test():
    return jsonify({"message": "Blog routes are working!"})


@blog_bp.route("", methods=["GET"])
def list_posts():
    """Newest posts first; full `content` is left out of list views."""
    query = {}
    category_filter(query, request.args.get("category"))
    if request.args.get("featured") == "true":
        query["featured"] = True
    search_filter(query, request.args.get("search"))

    try:
        posts, total, page, total_pages = paginate(
            get_collection(BLOG_POSTS),
            query,
            request.args,
            sort=[("date", DESCENDING), ("featured", DESCENDING)],
            default_limit=10,
            projection={"content": 0},
        )
    except PyMongoError:
        log.exception("❌ Error fetching blog posts")
        return jsonify({"message": "Error fetching blog posts"}), 500

    return jsonify({"posts": posts, "total": total, "page": page, "totalPages": total_pages})


@blog_bp.route("/featured", methods=["GET"])
def featured_post():
    try:
        post = get_collection(BLOG_POSTS).find_one({"featured": True}, sort=[("date", DESCENDING)])
    except PyMongoError:
        log.exception("❌ Error fetching featured post")
        return jsonify({"message": "Error fetching featured post"}), 500
    return jsonify(post)


@blog_bp.route("/categories/list", methods=["GET"])
def post_categories():
    try:
        return jsonify(get_collection(BLOG_POSTS).distinct("category"))
    except PyMongoError:
        log.exception("❌ Error fetching blog categories")
        return jsonify({"message": "Error fetching categories"}), 500


@blog_bp.route("/<slug>", methods=["GET"])
def get_post(slug):
    try:
        post = increment_counter(get_collection(BLOG_POSTS), {"slug": slug}, "views")
    except PyMongoError:
        log.exception("❌ Error fetching blog post %s", slug)
        return jsonify({"message": "Error fetching blog post"}), 500

    if post is None:
        return jsonify({"message": "Blog post not found"}), 404
    return jsonify(post)
