from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait

from django.conf import settings
from django.db import connections

from reports import llm
from reports.events import ReportEvents
from reports.prompts import project_report_prompt
from reports.stance_service import StanceReportService
from reports.stores import ProjectAnalysisStore

KIND = "project_analysis"


def _report_settings():
    return getattr(settings, "STANCE_REPORTS", {})


class ProjectReportService:
    """
    Project-wide report: runs the stance report for every question, then
    asks the LLM for one synthesis across them.

    max_workers: bound on concurrent question analyses. None means one
        worker per question; 1 runs them in the calling thread.
    force_question_analyses: when a project report is forced, also force
        each question's analysis. Off by default, so a forced project
        report reuses cached question analyses.
    """

    def __init__(self, generate=None, store=None, stance_service=None, events=None,
                 max_workers=None, force_question_analyses=None):
        config = _report_settings()
        self.generate = generate or llm.generate
        self.store = store or ProjectAnalysisStore()
        self.events = events or ReportEvents()
        self.stance_service = stance_service or StanceReportService(generate=self.generate, events=self.events)
        self.max_workers = max_workers if max_workers is not None else config.get("MAX_WORKERS")
        if force_question_analyses is None:
            force_question_analyses = config.get("FORCE_QUESTION_ANALYSES", False)
        self.force_question_analyses = bool(force_question_analyses)

        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")

    def get_analysis(self, project_id):
        with self.events.stage("cache_lookup", kind=KIND, project=project_id):
            return self.store.find(project_id)

    def generate_project_report(self, project, comments, force_regenerate=False):
        key = {"project": project.id}

        if not force_regenerate:
            existing = self.get_analysis(project.id)
            if existing is not None:
                self.events.cache_hit(KIND, **key)
                return {
                    "project_name": existing.project_name,
                    "overall_analysis": existing.overall_analysis,
                }
        self.events.cache_miss(KIND, forced=force_regenerate, **key)

        force_questions = force_regenerate and self.force_question_analyses
        with self.events.stage("question_analyses", kind=KIND, questions=len(project.questions), **key):
            question_analyses = self._analyze_questions(project, comments, force_questions)

        prompt = project_report_prompt(project.name, project.description or "", question_analyses)

        self.events.generation_started(KIND, len(prompt), **key)
        with self.events.stage("generation", kind=KIND, **key):
            overall_analysis = self.generate(prompt)
        self.events.generation_finished(KIND, len(overall_analysis or ""), **key)

        with self.events.stage("persistence", kind=KIND, **key):
            self.store.upsert(project.id, project.name, overall_analysis)
        self.events.persisted(KIND, **key)

        return {
            "project_name": project.name,
            "overall_analysis": overall_analysis,
        }

    def _analyze_question(self, project, comments, question, force):
        return self.stance_service.analyze(
            project.id,
            question.text,
            comments,
            question.stances,
            question.id,
            force_regenerate=force,
        )

    def _analyze_in_worker(self, project, comments, question, force):
        try:
            return self._analyze_question(project, comments, question, force)
        finally:
            # Worker threads get their own DB connections; don't leak them
            connections.close_all()

    def _analyze_questions(self, project, comments, force):
        """Analyze every question; results keep the project's question order."""
        questions = list(project.questions)
        if not questions:
            return []

        if self.max_workers == 1:
            return [self._analyze_question(project, comments, q, force) for q in questions]

        workers = min(self.max_workers or len(questions), len(questions))
        pool = ThreadPoolExecutor(max_workers=workers)
        futures = [
            pool.submit(self._analyze_in_worker, project, comments, q, force)
            for q in questions
        ]
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)
        failed = next((f for f in futures if f in done and f.exception() is not None), None)
        if failed is not None:
            # Fail fast: don't block on questions still in flight
            pool.shutdown(wait=False, cancel_futures=True)
            raise failed.exception()
        pool.shutdown(wait=False)
        return [f.result() for f in futures]
