# psychologists/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import PsychologistViewSet

# Create router for ViewSets
router = DefaultRouter()
router.register('', PsychologistViewSet, basename='psychologists')

# URL patterns
urlpatterns = [
    path('', include(router.urls)),
]

# - GET    /api/psychologists/           -> list psychologists
# - POST   /api/psychologists/           -> create psychologist (admin, coordinator)
# - GET    /api/psychologists/me/        -> record linked to the current login
# - GET    /api/psychologists/{id}/      -> psychologist detail
# - PATCH  /api/psychologists/{id}/      -> update psychologist (admin, coordinator)
# - DELETE /api/psychologists/{id}/      -> delete psychologist (admin, coordinator)
