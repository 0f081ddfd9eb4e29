from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import AuthViewSet, UserViewSet

# Create router for ViewSets
router = DefaultRouter()
router.register('auth', AuthViewSet, basename='auth')
router.register('users', UserViewSet, basename='users')

# URL patterns
urlpatterns = [
    path('', include(router.urls)),
]

# - POST   /api/auth/login/            -> obtain token
# - POST   /api/auth/logout/           -> delete token
# - GET    /api/auth/me/               -> current user profile (+ linked psychologist id)
# - GET    /api/users/                 -> list users (admin)
# - POST   /api/users/                 -> create user (admin)
# - GET    /api/users/{id}/            -> user detail (admin)
# - POST   /api/users/{id}/role/       -> change role (admin)
# - DELETE /api/users/{id}/            -> delete user (admin)
