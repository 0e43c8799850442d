"""
Structured checkpoints for the report pipeline.

Services call these at fixed points instead of logging inline, so the
logger (or a recording fake in tests) can be swapped in one place.
"""

import logging
from contextlib import contextmanager


def _fmt(context):
    return " ".join(f"{key}={value}" for key, value in context.items())


class ReportEvents:
    def __init__(self, logger=None):
        self.logger = logger or logging.getLogger("reports")

    def cache_hit(self, kind, **key):
        self.logger.info("[cache hit] %s %s", kind, _fmt(key))

    def cache_miss(self, kind, **key):
        self.logger.info("[cache miss] %s %s", kind, _fmt(key))

    def generation_started(self, kind, prompt_chars, **key):
        self.logger.info("[generate] %s start %s prompt_chars=%d", kind, _fmt(key), prompt_chars)

    def generation_finished(self, kind, output_chars, **key):
        self.logger.info("[generate] %s done %s output_chars=%d", kind, _fmt(key), output_chars)

    def persisted(self, kind, **key):
        self.logger.info("[persist] %s %s", kind, _fmt(key))

    @contextmanager
    def stage(self, name, **context):
        """Log any exception raised inside the block with its stage, then re-raise it."""
        try:
            yield
        except Exception:
            self.logger.exception("[error] %s failed %s", name, _fmt(context))
            raise
