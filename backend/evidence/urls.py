"""
Evidence app URL configuration.

Included in the project-level ``urls.py`` as::

    path('api/evidence/', include('evidence.urls')),

    GET /{token}/   → EvidenceDownloadView
"""

from django.urls import path

from .views import EvidenceDownloadView

app_name = "evidence"

urlpatterns = [
    path("<str:token>/", EvidenceDownloadView.as_view(), name="download"),
]
