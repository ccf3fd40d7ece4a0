from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import OfficerRoster, Role, User


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ("name", "hierarchy_level", "description")
    search_fields = ("name",)
    ordering = ("-hierarchy_level",)


@admin.register(OfficerRoster)
class OfficerRosterAdmin(admin.ModelAdmin):
    list_display = ("full_name", "staff_number")
    search_fields = ("full_name", "staff_number")


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "full_name", "staff_number", "phone",
                    "is_active", "role")
    search_fields = ("username", "full_name", "staff_number", "email")
    list_filter = ("is_active", "is_staff", "role")
    filter_horizontal = ("groups", "user_permissions")
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Staff Profile", {"fields": ("full_name", "staff_number", "phone", "role")}),
    )
    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ("Staff Profile", {"fields": ("email", "full_name", "staff_number",
                                      "phone", "role")}),
    )
