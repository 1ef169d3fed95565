"""`flask seed-jobs`: load the bundled sample listings into the jobs collection."""
import json
from pathlib import Path

import click
from flask.cli import with_appcontext

from jobboard.db import JOBS, get_collection
from jobboard.jobs.engine import JobQueryEngine, JobValidationError
from jobboard.log import get_logger

log = get_logger(__name__)

SAMPLE_JOBS_PATH = Path(__file__).resolve().parent / "sample_jobs.json"


def load_sample_jobs(path: Path = SAMPLE_JOBS_PATH) -> list:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def seed_jobs(collection, jobs: list, clear: bool = True) -> int:
    """Insert `jobs` through the create path; returns how many were stored."""
    if clear:
        removed = collection.delete_many({}).deleted_count
        log.info("🧹 Cleared %d existing jobs", removed)

    engine = JobQueryEngine(collection)
    inserted = 0
    for i, job in enumerate(jobs, start=1):
        try:
            engine.create_job(job)
            inserted += 1
        except JobValidationError as e:
            log.warning("⚠️ Skipping sample job %d (%s): %s", i, job.get("jobTitle", "?"), e.errors)
    return inserted


@click.command("seed-jobs")
@click.option("--clear/--no-clear", default=True, help="Delete existing jobs before inserting.")
@click.option("--file", "file_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=SAMPLE_JOBS_PATH, show_default=True, help="JSON list of job listings.")
@with_appcontext
def seed_jobs_command(clear, file_path):
    jobs = load_sample_jobs(file_path)
    inserted = seed_jobs(get_collection(JOBS), jobs, clear=clear)
    click.echo(f"Successfully inserted {inserted} of {len(jobs)} jobs")
