"""URL routing for the booking domain.

Mounted at ``/api/v1/bookings/``. Fixed paths such as ``mine/`` and
``draft/`` are routed before the ``<pk>/`` detail route.
"""

from __future__ import annotations

from rest_framework.routers import SimpleRouter  # type: ignore

from .views import BookingViewSet

router = SimpleRouter()
router.register(r"", BookingViewSet, basename="booking")

urlpatterns = router.urls
