from django.urls import path
from . import views

urlpatterns = [
    path('impressions/', views.impressions, name='impressions'),
]
