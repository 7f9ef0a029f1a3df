# apps/core/urls.py

from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    # === ORGANIZATION ===
    path('organization/boards/', views.organization_boards, name='organization_boards'),

    # === MONITORING ===
    path('health/', views.health_check, name='health'),
]
