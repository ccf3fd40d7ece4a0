from django.contrib import admin

from .models import CONTENT_FIELDS, SNAPSHOT_FIELDS, Complaint


@admin.register(Complaint)
class ComplaintAdmin(admin.ModelAdmin):
    """Read-only.  Writes go through ``ComplaintLifecycleService``."""

    list_display = ("id", "train_number", "coach_number", "status",
                    "reporter_name", "created_at")
    list_filter = ("status", "train_number")
    search_fields = ("id", "pnr_number", "customer_name",
                     "train_number", "coach_number", "reporter_staff_number")
    date_hierarchy = "created_at"
    readonly_fields = ("id", *SNAPSHOT_FIELDS, *CONTENT_FIELDS, "status",
                       "created_at", "updated_at", "resolved_at", "evidence_paths")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
