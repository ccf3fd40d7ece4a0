"""
Complaints app URL configuration.

All routes are registered under the ``/api/complaints/`` prefix.

Endpoint Map
------------
    GET    /complaints/                      → ComplaintViewSet.list
    POST   /complaints/                      → ComplaintViewSet.create
    GET    /complaints/summary/              → ComplaintViewSet.summary
    GET    /complaints/{id}/                 → ComplaintViewSet.retrieve
    PATCH  /complaints/{id}/                 → ComplaintViewSet.partial_update
    DELETE /complaints/{id}/                 → ComplaintViewSet.destroy
    GET    /complaints/{id}/evidence/        → ComplaintViewSet.evidence (signed links)
    POST   /complaints/{id}/evidence/        → ComplaintViewSet.evidence (attach)
    GET    /complaints/{id}/sync-attempts/   → ComplaintViewSet.sync_attempts
"""

from rest_framework.routers import DefaultRouter

from .views import ComplaintViewSet

router = DefaultRouter()
router.register(
    prefix=r"complaints",
    viewset=ComplaintViewSet,
    basename="complaint",
)

urlpatterns = router.urls
