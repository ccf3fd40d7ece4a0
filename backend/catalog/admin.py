from django.contrib import admin

from .models import CoachFormation, Train


class CoachFormationInline(admin.TabularInline):
    model = CoachFormation
    extra = 0
    ordering = ("position",)


@admin.register(Train)
class TrainAdmin(admin.ModelAdmin):
    list_display = ("train_number", "created_at")
    search_fields = ("train_number",)
    inlines = [CoachFormationInline]


@admin.register(CoachFormation)
class CoachFormationAdmin(admin.ModelAdmin):
    list_display = ("train", "coach_number", "coach_class", "unit",
                    "configuration", "capacity", "position")
    list_filter = ("coach_class",)
    search_fields = ("train__train_number", "coach_number")
