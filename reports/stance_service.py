from reports import llm
from reports.events import ReportEvents
from reports.prompts import stance_report_prompt
from reports.stores import StanceAnalysisStore

KIND = "stance_analysis"


def aggregate_stances(comments, stances, question_id):
    """
    Bucket comments by their stance on one question.

    Returns {stance_id: {"count": n, "comments": [...]}} with one entry per
    declared stance, in declaration order. Comments without extracted
    content, without a stance on the question, or pointing at an undeclared
    stance are skipped.
    """
    buckets = {stance.id: {"count": 0, "comments": []} for stance in stances}

    for comment in comments:
        assignment = comment.stance_for(question_id)
        if assignment is None or not comment.extracted_content:
            continue
        bucket = buckets.get(assignment.stance_id)
        if bucket is None:
            continue
        bucket["count"] += 1
        bucket["comments"].append(comment.extracted_content)

    return buckets


class StanceReportService:
    """
    Cache-or-compute stance report for a single question.

    generate: callable prompt -> text (defaults to the configured LLM)
    store: find/upsert access to persisted analyses
    events: observability checkpoints
    """

    def __init__(self, generate=None, store=None, events=None):
        self.generate = generate or llm.generate
        self.store = store or StanceAnalysisStore()
        self.events = events or ReportEvents()

    def get_analysis(self, project_id, question_id):
        with self.events.stage("cache_lookup", kind=KIND, project=project_id, question=question_id):
            return self.store.find(project_id, question_id)

    def analyze(self, project_id, question_text, comments, stances, question_id, force_regenerate=False):
        key = {"project": project_id, "question": question_id}

        if not force_regenerate:
            existing = self.get_analysis(project_id, question_id)
            if existing is not None:
                self.events.cache_hit(KIND, **key)
                return {
                    "question": question_text,
                    "stance_analysis": existing.stance_analysis,
                    "analysis": existing.analysis,
                }
        self.events.cache_miss(KIND, forced=force_regenerate, **key)

        stance_analysis = aggregate_stances(comments, stances, question_id)
        stance_names = {stance.id: stance.name for stance in stances}
        prompt = stance_report_prompt(question_text, stance_analysis, stance_names)

        self.events.generation_started(KIND, len(prompt), **key)
        with self.events.stage("generation", kind=KIND, **key):
            analysis = self.generate(prompt)
        self.events.generation_finished(KIND, len(analysis or ""), **key)

        with self.events.stage("persistence", kind=KIND, **key):
            self.store.upsert(project_id, question_id, analysis, stance_analysis)
        self.events.persisted(KIND, **key)

        return {
            "question": question_text,
            "stance_analysis": stance_analysis,
            "analysis": analysis,
        }
