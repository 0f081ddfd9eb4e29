# catalogs/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ProcessViewSet, ConsultationReasonViewSet, SystemSettingsViewSet

# Create router for ViewSets
router = DefaultRouter()
router.register('processes', ProcessViewSet, basename='process')
router.register('reasons', ConsultationReasonViewSet, basename='consultation-reason')

# URL patterns
urlpatterns = [
    path('settings/', SystemSettingsViewSet.as_view({'get': 'retrieve', 'patch': 'partial_update'}),
         name='system-settings'),
    path('', include(router.urls)),
]

# - GET    /api/catalogs/processes/                      -> list processes
# - POST   /api/catalogs/processes/                      -> create process (admin)
# - GET    /api/catalogs/processes/active/               -> processes selectable for appointments
# - GET    /api/catalogs/processes/{id}/                 -> process detail
# - PATCH  /api/catalogs/processes/{id}/                 -> update process (admin)
# - DELETE /api/catalogs/processes/{id}/                 -> delete process (admin)
# - POST   /api/catalogs/processes/{id}/toggle-status/   -> activate/deactivate (admin)
#
# Same routes under /api/catalogs/reasons/ for consultation reasons.
#
# - GET    /api/catalogs/settings/                       -> office settings (admin)
# - PATCH  /api/catalogs/settings/                       -> update office settings (admin)
