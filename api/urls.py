"""
API URLs for StayDesk
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from addons.views import ServiceViewSet
from audit.views import AuditLogViewSet
from blocks.views import BlockViewSet
from bookings.views import BookingViewSet
from common.views import cron_checkout_reminders
from dashboard.views import DashboardViewSet, ReviewViewSet, checkout_status
from guests.views import GuestViewSet
from maintenance.views import MaintenanceLogViewSet
from notifications.views import NotificationViewSet
from payments.views import PaymentViewSet, SecurityDepositViewSet
from rooms.views import RoomViewSet, RoomTypeViewSet, AssetViewSet
from users.views import UserViewSet

# Create router
router = DefaultRouter()
router.register(r'users', UserViewSet, basename='user')
router.register(r'blocks', BlockViewSet, basename='block')
router.register(r'room-types', RoomTypeViewSet, basename='roomtype')
router.register(r'rooms', RoomViewSet, basename='room')
router.register(r'assets', AssetViewSet, basename='asset')
router.register(r'guests', GuestViewSet, basename='guest')
router.register(r'bookings', BookingViewSet, basename='booking')
router.register(r'payments', PaymentViewSet, basename='payment')
router.register(r'deposits', SecurityDepositViewSet, basename='deposit')
router.register(r'services', ServiceViewSet, basename='service')
router.register(r'maintenance', MaintenanceLogViewSet, basename='maintenance')
router.register(r'notifications', NotificationViewSet, basename='notification')
router.register(r'reviews', ReviewViewSet, basename='review')
router.register(r'audit-logs', AuditLogViewSet, basename='auditlog')
router.register(r'dashboard', DashboardViewSet, basename='dashboard')

urlpatterns = [
    # JWT Authentication
    path('auth/login/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    path('checkout-status/', checkout_status, name='checkout_status'),
    path('cron/checkout-reminders/', cron_checkout_reminders, name='cron_checkout_reminders'),

    # API routes
    path('', include(router.urls)),
]
