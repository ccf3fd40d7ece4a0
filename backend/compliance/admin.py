from django.contrib import admin

from .models import ComplianceSyncAttempt


@admin.register(ComplianceSyncAttempt)
class ComplianceSyncAttemptAdmin(admin.ModelAdmin):
    """Audit trail: viewable, never editable."""

    list_display = ("attempt_at", "complaint_id", "outcome", "message")
    list_filter = ("outcome",)
    search_fields = ("message",)
    date_hierarchy = "attempt_at"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
