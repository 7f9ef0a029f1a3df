# config/urls.py

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from django.views.generic import RedirectView

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # Applications
    path('', include('apps.core.urls')),
    path('board/', include('apps.board.urls')),
    path('audit/', include('apps.audit.urls')),
    path('billing/', include('apps.billing.urls')),

    # Convenience redirects
    path('', RedirectView.as_view(pattern_name='core:organization_boards', permanent=False)),
]

# Static files in development
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)

    # Debug Toolbar when available
    try:
        import debug_toolbar

        urlpatterns = [
                          path('__debug__/', include(debug_toolbar.urls)),
                      ] + urlpatterns
    except ImportError:
        pass

# Admin titles
admin.site.site_header = 'Planify Admin'
admin.site.site_title = 'Planify'
admin.site.index_title = 'Organizations, boards and billing'
