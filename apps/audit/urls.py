# apps/audit/urls.py

from django.urls import path
from . import views

app_name = 'audit'

urlpatterns = [
    path('cards/<int:card_id>/logs/', views.card_logs, name='card_logs'),
    path('activity/', views.activity, name='activity'),
]
