# apps/billing/urls.py

from django.urls import path
from . import views

app_name = 'billing'

urlpatterns = [
    path('limits/', views.limits_status, name='limits'),
]
