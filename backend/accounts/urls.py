"""
Accounts app URL configuration.

All routes are namespaced under ``accounts`` and included in the
project-level ``urls.py`` as::

    path('api/accounts/', include('accounts.urls')),

Endpoint Map
------------
Registration
    GET    /auth/roster/                → RosterView
    POST   /auth/register/              → RegisterView

Authentication
    POST   /auth/login/                 → LoginView
    POST   /auth/token/refresh/         → TokenRefreshView (SimpleJWT)

Current User Profile ("Me")
    GET    /me/                         → MeView
    PATCH  /me/                         → MeView
    POST   /me/password/                → PasswordChangeView
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import LoginView, MeView, PasswordChangeView, RegisterView, RosterView

app_name = "accounts"

urlpatterns = [
    # ── Registration ────────────────────────────────────────────────
    path("auth/roster/", RosterView.as_view(), name="roster"),
    path("auth/register/", RegisterView.as_view(), name="register"),

    # ── Authentication ───────────────────────────────────────────────
    path("auth/login/", LoginView.as_view(), name="login"),
    path(
        "auth/token/refresh/",
        TokenRefreshView.as_view(),
        name="token-refresh",
    ),

    # ── Current User (Me) ───────────────────────────────────────────
    path("me/", MeView.as_view(), name="me"),
    path("me/password/", PasswordChangeView.as_view(), name="me-password"),
]
