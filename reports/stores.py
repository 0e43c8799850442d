"""
Document-store access for persisted analyses.

Services talk to these instead of the ORM so tests can hand in fakes with
the same three operations: find, insert and upsert.
"""

from .models import ProjectAnalysis, StanceAnalysis


def normalize_bucket(stance_analysis):
    """Return a plain {stance_id: {count, comments}} dict with int counts."""
    return {
        stance_id: {
            "count": int(entry.get("count", 0)),
            "comments": list(entry.get("comments", [])),
        }
        for stance_id, entry in (stance_analysis or {}).items()
    }


class StanceAnalysisStore:
    """Per-question analyses keyed by (project_id, question_id)."""

    def find(self, project_id, question_id):
        record = StanceAnalysis.objects.filter(
            project_id=str(project_id),
            question_id=str(question_id),
        ).first()
        if record is not None:
            record.stance_analysis = normalize_bucket(record.stance_analysis)
        return record

    def insert(self, project_id, question_id, analysis, stance_analysis):
        return StanceAnalysis.objects.create(
            project_id=str(project_id),
            question_id=str(question_id),
            analysis=analysis,
            stance_analysis=stance_analysis,
        )

    def upsert(self, project_id, question_id, analysis, stance_analysis):
        record, _ = StanceAnalysis.objects.update_or_create(
            project_id=str(project_id),
            question_id=str(question_id),
            defaults={
                'analysis': analysis,
                'stance_analysis': stance_analysis,
            },
        )
        return record


class ProjectAnalysisStore:
    """Project-level syntheses keyed by project_id."""

    def find(self, project_id):
        return ProjectAnalysis.objects.filter(project_id=str(project_id)).first()

    def upsert(self, project_id, project_name, overall_analysis):
        # update_or_create goes through save(), so auto_now refreshes updated_at
        record, _ = ProjectAnalysis.objects.update_or_create(
            project_id=str(project_id),
            defaults={
                'project_name': project_name,
                'overall_analysis': overall_analysis,
            },
        )
        return record
