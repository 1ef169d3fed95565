from jobboard.jobs.routes import jobs_bp

__all__ = ["jobs_bp"]
