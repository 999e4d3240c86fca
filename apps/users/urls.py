"""Account endpoints: registration and the caller's profile."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter  # type: ignore

from .views import UserViewSet

# Only list-level actions (register/, me/) plus the detail route
router = SimpleRouter()
router.register(r'', UserViewSet, basename='user')

urlpatterns = router.urls
