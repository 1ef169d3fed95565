"""Job board backend: job listings API plus content collections."""
