# faqs.py
from bson import ObjectId
from flask import Blueprint, jsonify, request
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from jobboard.content.listing import category_filter, increment_counter, paginate, search_filter
from jobboard.db import FAQS, get_collection
from jobboard.log import get_logger

log = get_logger(__name__)

faqs_bp = Blueprint("faqs_bp", __name__, url_prefix="/api/faqs")


@faqs_bp.route("/test", methods=["GET"])
def faqs_test():
    return jsonify({"message": "FAQs routes are working!"})


@faqs_bp.route("", methods=["GET"])
def list_faqs():
    query = {}
    category_filter(query, request.args.get("category"))
    search_filter(query, request.args.get("search"))

    try:
        faqs, total, page, total_pages = paginate(
            get_collection(FAQS),
            query,
            request.args,
            sort=[("order", ASCENDING), ("category", ASCENDING)],
            default_limit=50,
        )
    except PyMongoError:
        log.exception("❌ Error fetching FAQs")
        return jsonify({"message": "Error fetching FAQs"}), 500

    return jsonify({"faqs": faqs, "total": total, "page": page, "totalPages": total_pages})


@faqs_bp.route("/categories/list", methods=["GET"])
def faq_categories():
    try:
        return jsonify(get_collection(FAQS).distinct("category"))
    except PyMongoError:
        log.exception("❌ Error fetching FAQ categories")
        return jsonify({"message": "Error fetching categories"}), 500


def _record_feedback(faq_id: str, field: str):
    if not ObjectId.is_valid(faq_id):
        return jsonify({"message": "FAQ not found"}), 404
    try:
        faq = increment_counter(get_collection(FAQS), {"_id": ObjectId(faq_id)}, field)
    except PyMongoError:
        log.exception("❌ Error updating FAQ %s", faq_id)
        return jsonify({"message": "Error updating FAQ"}), 500

    if faq is None:
        return jsonify({"message": "FAQ not found"}), 404
    return jsonify({"message": "Thank you for your feedback!"})


@faqs_bp.route("/<faq_id>/helpful", methods=["POST"])
def mark_helpful(faq_id):
    return _record_feedback(faq_id, "helpful")


@faqs_bp.route("/<faq_id>/not-helpful", methods=["POST"])
def mark_not_helpful(faq_id):
    return _record_feedback(faq_id, "notHelpful")
