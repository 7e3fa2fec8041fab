"""
URL configuration for the textile ERP backend.

- /api/v1/   REST API
- /uploads/  uploaded product images
- /admin/    Django admin
- anything else falls back to the built frontend bundle
"""
from django.conf import settings
from django.contrib import admin
from django.urls import include, path, re_path
from django.views.static import serve

from inventory.views import frontend

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include('inventory.urls')),
    re_path(r'^uploads/(?P<path>.*)$', serve, {'document_root': settings.MEDIA_ROOT}),
    re_path(r'^(?!api/|uploads/|admin/)(?P<path>.*)$', frontend, name='frontend'),
]
