from django.urls import path
from authentication.views import SignupView, LoginView, LogoutView, OnboardView, MeView

urlpatterns = [
    path('signup', SignupView.as_view(), name='signup'),
    path('login', LoginView.as_view(), name='login'),
    path('logout', LogoutView.as_view(), name='logout'),
    path('onboarding', OnboardView.as_view(), name='onboarding'),
    path('me', MeView.as_view(), name='me'),
]
