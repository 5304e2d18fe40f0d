# profiles/urls.py
from django.urls import path
from .views import RecommendedUsersView, MyFriendsView

urlpatterns = [
    path('', RecommendedUsersView.as_view(), name='recommended_users'),
    path('friends', MyFriendsView.as_view(), name='my_friends'),
]
