"""
Catalog app URL configuration.

    GET /trains/                          → TrainViewSet.list
    GET /trains/{train_number}/coaches/   → TrainViewSet.coaches
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import TrainViewSet

app_name = "catalog"

router = DefaultRouter()
router.register(r"trains", TrainViewSet, basename="train")

urlpatterns = [
    path("", include(router.urls)),
]
