"""
URL configuration for the staydesk project.
"""
from django.contrib import admin
from django.urls import path, include
from django.shortcuts import redirect

# Import admin customization (just to apply it, not to use)
from staydesk import admin as admin_customization  # noqa: F401

# Import health check URLs
from common.decorators import home_url_name
from common.health import get_health_urls


def root_redirect(request):
    """Redirect root to the user's home page or login"""
    if request.user.is_authenticated:
        return redirect(home_url_name(request.user))
    return redirect('users:login')


urlpatterns = [
    path('', root_redirect, name='root'),
    path('admin/', admin.site.urls),
    path('api/', include('api.urls')),  # API routes
    path('dashboard/', include('dashboard.urls')),
    path('users/', include('users.urls')),
    path('blocks/', include('blocks.urls')),
    path('rooms/', include('rooms.urls')),
    path('guests/', include('guests.urls')),
    path('bookings/', include('bookings.urls')),
    path('payments/', include('payments.urls')),
    path('services/', include('addons.urls')),
    path('maintenance/', include('maintenance.urls')),
    path('notifications/', include('notifications.urls')),
    path('audit/', include('audit.urls')),
    path('settings/', include('common.urls')),
]

# Add health check endpoints (for load balancers, monitoring)
urlpatterns += get_health_urls()
