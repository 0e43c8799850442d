from django.contrib import admin

from .models import ProjectAnalysis, StanceAnalysis


@admin.register(StanceAnalysis)
class StanceAnalysisAdmin(admin.ModelAdmin):
    list_display = ['project_id', 'question_id', 'created_at', 'updated_at']
    list_filter = ['project_id']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(ProjectAnalysis)
class ProjectAnalysisAdmin(admin.ModelAdmin):
    list_display = ['project_name', 'project_id', 'updated_at']
    search_fields = ['project_name', 'project_id']
    readonly_fields = ['created_at', 'updated_at']
