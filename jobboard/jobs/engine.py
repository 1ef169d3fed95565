"""
Job listing query engine.

All state lives in MongoDB; the engine holds only a collection handle, so
one instance can serve concurrent requests. Every mutation is a single
document operation and the apply-click counter is incremented with `$inc`
inside `find_one_and_update`, never by reading and writing back.
"""
import math
from datetime import datetime, timezone
from typing import Callable, Optional

from bson import ObjectId
from pydantic import ValidationError
from pydantic.alias_generators import to_camel
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from jobboard.jobs.filters import JobFilter
from jobboard.jobs.model import JobListing, strip_system_fields
from jobboard.log import get_logger

log = get_logger(__name__)

# camelCase and snake_case names accepted in update payloads -> storage key
_FIELD_KEYS = {}
for _name in JobListing.model_fields:
    _FIELD_KEYS[_name] = to_camel(_name)
    _FIELD_KEYS[to_camel(_name)] = to_camel(_name)

EMPTY_STATS = {"totalJobs": 0, "byCategory": [], "byEmploymentType": [], "byExperienceLevel": []}


class JobNotFound(Exception):
    def __init__(self, job_id):
        super().__init__(f"Job not found: {job_id}")
        self.job_id = job_id


class JobValidationError(Exception):
    """Payload failed JobListing validation; `errors` is pydantic's error list."""

    def __init__(self, errors):
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


class StoreFailure(Exception):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _object_id(job_id) -> Optional[ObjectId]:
    if isinstance(job_id, ObjectId):
        return job_id
    if job_id and ObjectId.is_valid(job_id):
        return ObjectId(job_id)
    return None


def _as_object(payload) -> dict:
    """Request bodies must be JSON objects; a missing body counts as empty."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise JobValidationError([{
            "type": "dict_type",
            "loc": (),
            "msg": "Input should be a valid dictionary",
        }])
    return payload


class JobQueryEngine:
    def __init__(self, collection, clock: Callable[[], datetime] = _utcnow):
        self.collection = collection
        self.clock = clock

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def list_jobs(self, filters: JobFilter, page: int = 1, limit: int = 3) -> dict:
        query = filters.to_query()
        skip = (page - 1) * limit

        try:
            cursor = self.collection.find(query).sort("createdAt", DESCENDING).skip(skip).limit(limit)
            jobs = list(cursor)
            total = self.collection.count_documents(query)
        except PyMongoError as exc:
            raise StoreFailure("listing jobs failed") from exc

        log.debug("Listed %d/%d jobs (page=%d, limit=%d)", len(jobs), total, page, limit)
        return {
            "jobs": jobs,
            "pagination": {
                "currentPage": page,
                "totalPages": math.ceil(total / limit),
                "totalJobs": total,
                "hasNext": skip + len(jobs) < total,
                "hasPrev": page > 1,
            },
        }

    def get_job(self, job_id) -> dict:
        """Fetch one listing whether or not it is active."""
        oid = _object_id(job_id)
        if oid is None:
            raise StoreFailure(f"malformed job id: {job_id!r}")
        try:
            job = self.collection.find_one({"_id": oid})
        except PyMongoError as exc:
            raise StoreFailure("fetching job failed") from exc
        if job is None:
            raise JobNotFound(job_id)
        return job

    def get_categories(self) -> list:
        try:
            return self.collection.distinct("category")
        except PyMongoError as exc:
            raise StoreFailure("fetching categories failed") from exc

    def get_stats(self) -> dict:
        # $push keeps one {..., count: 1} marker per document rather than
        # reducing to per-group totals; clients depend on this shape.
        pipeline = [
            {"$match": {"isActive": True}},
            {
                "$group": {
                    "_id": None,
                    "totalJobs": {"$sum": 1},
                    "byCategory": {"$push": {"category": "$category", "count": 1}},
                    "byEmploymentType": {"$push": {"type": "$employmentType", "count": 1}},
                    "byExperienceLevel": {"$push": {"level": "$experienceLevel", "count": 1}},
                }
            },
        ]
        try:
            stats = list(self.collection.aggregate(pipeline))
        except PyMongoError as exc:
            raise StoreFailure("aggregating job stats failed") from exc
        return stats[0] if stats else dict(EMPTY_STATS)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create_job(self, payload: dict) -> dict:
        try:
            job = JobListing.model_validate(strip_system_fields(_as_object(payload)))
        except ValidationError as exc:
            raise JobValidationError(exc.errors(include_url=False, include_context=False)) from exc

        document = job.to_document()
        now = self.clock()
        document["createdAt"] = now
        document["updatedAt"] = now

        try:
            result = self.collection.insert_one(document)
        except PyMongoError as exc:
            raise StoreFailure("creating job failed") from exc

        document["_id"] = result.inserted_id
        log.info("✅ Created job %s: %s at %s", result.inserted_id, job.job_title, job.company_name)
        return document

    def update_job(self, job_id, partial: dict) -> dict:
        """
        Replace only the fields present in `partial`, after validating the
        merged record. Unknown keys and system fields are ignored.
        """
        oid = _object_id(job_id)
        if oid is None:
            raise JobNotFound(job_id)

        updates = {}
        for key, value in _as_object(partial).items():
            storage_key = _FIELD_KEYS.get(key)
            if storage_key:
                updates[storage_key] = value

        try:
            current = self.collection.find_one({"_id": oid})
        except PyMongoError as exc:
            raise StoreFailure("fetching job for update failed") from exc
        if current is None:
            raise JobNotFound(job_id)

        merged = {**strip_system_fields(current), **updates}
        try:
            validated = JobListing.model_validate(merged).model_dump(by_alias=True)
        except ValidationError as exc:
            raise JobValidationError(exc.errors(include_url=False, include_context=False)) from exc

        changes = {key: validated[key] for key in updates}
        changes["updatedAt"] = self.clock()

        try:
            job = self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            raise StoreFailure("updating job failed") from exc
        if job is None:
            # Deleted between the read and the write
            raise JobNotFound(job_id)

        log.info("✏️ Updated job %s (%s)", oid, ", ".join(sorted(updates)) or "no fields")
        return job

    def delete_job(self, job_id) -> None:
        oid = _object_id(job_id)
        if oid is None:
            raise JobNotFound(job_id)
        try:
            result = self.collection.delete_one({"_id": oid})
        except PyMongoError as exc:
            raise StoreFailure("deleting job failed") from exc
        if result.deleted_count == 0:
            raise JobNotFound(job_id)
        log.info("🗑️ Deleted job %s", oid)

    def increment_apply_click(self, job_id) -> dict:
        oid = _object_id(job_id)
        if oid is None:
            raise JobNotFound(job_id)
        try:
            job = self.collection.find_one_and_update(
                {"_id": oid},
                {"$inc": {"applyClickCount": 1}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            raise StoreFailure("incrementing apply clicks failed") from exc
        if job is None:
            raise JobNotFound(job_id)
        return job
