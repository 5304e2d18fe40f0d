# chat/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('token', views.StreamTokenView.as_view(), name='chat-token'),
]
