# appointments/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    AppointmentViewSet,
    AppointmentAnalyticsViewSet
)

# Create router for ViewSets
router = DefaultRouter()
router.register('analytics', AppointmentAnalyticsViewSet, basename='appointment-analytics')
router.register('', AppointmentViewSet, basename='appointment')  # Main appointment endpoints

# URL patterns
urlpatterns = [
    # ViewSet routes (handled by router)
    path('', include(router.urls)),
]

# The resulting URL patterns will be:
#
# Main Appointment Management:
# - GET    /api/appointments/                                  -> filtered, ordered, paginated list (role-scoped)
# - POST   /api/appointments/                                  -> schedule new appointment (admin/coordinator)
# - GET    /api/appointments/{id}/                             -> appointment detail
# - PATCH  /api/appointments/{id}/                             -> edit scheduled appointment (admin/coordinator)
# - DELETE /api/appointments/{id}/                             -> delete appointment (admin/coordinator)
# - POST   /api/appointments/{id}/complete/                    -> complete with session results
# - POST   /api/appointments/{id}/cancel/                      -> cancel (admin/coordinator)
# - POST   /api/appointments/{id}/mark-no-show/                -> mark as no-show
# - POST   /api/appointments/{id}/attach-document/             -> attach result PDF to completed appointment
# - GET    /api/appointments/today/                            -> today's agenda
# - GET    /api/appointments/upcoming/                         -> next scheduled appointments
# - GET    /api/appointments/dashboard/                        -> totals, agenda and statistics
#
# Appointment Analytics & Reporting:
# - GET    /api/appointments/analytics/psychologist-stats/     -> per-psychologist counts and completion rate
