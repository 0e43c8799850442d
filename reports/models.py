from django.db import models


class StanceAnalysis(models.Model):
    project_id = models.CharField(max_length=64, db_index=True)
    question_id = models.CharField(max_length=64)

    # LLM narrative for the question
    analysis = models.TextField(blank=True, default='')

    # Comments bucketed by stance
    stance_analysis = models.JSONField(default=dict)  # {stance_id: {count, comments: [...]}, ...}

    # Metadata
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['project_id', 'question_id'], name='unique_stance_analysis_per_question'),
        ]

    def __str__(self):
        return f"Stance analysis: {self.project_id}/{self.question_id}"


class ProjectAnalysis(models.Model):
    project_id = models.CharField(max_length=64, unique=True)
    project_name = models.CharField(max_length=500)

    # LLM synthesis across all questions of the project
    overall_analysis = models.TextField(blank=True, default='')

    # Metadata
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = 'project analyses'

    def __str__(self):
        return f"Project analysis: {self.project_name}"
