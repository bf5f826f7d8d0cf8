from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    path('stats/', views.stats, name='stats'),
    path('dashboard/', views.dashboard, name='dashboard'),
    path('budget/', views.budget, name='budget'),
]
