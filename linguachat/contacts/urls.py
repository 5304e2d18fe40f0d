from django.urls import path
from .views import (
    SendFriendRequestView, AcceptFriendRequestView, GetFriendRequestsView, OutgoingFriendRequestsView,
)

urlpatterns = [
    path('friend-request/<str:recipient_id>', SendFriendRequestView.as_view(), name='send_friend_request'),
    path('friend-request/<str:request_id>/accept', AcceptFriendRequestView.as_view(), name='accept_friend_request'),
    path('friend-requests', GetFriendRequestsView.as_view(), name='get_friend_requests'),
    path('outgoing-friend-requests', OutgoingFriendRequestsView.as_view(), name='outgoing_friend_requests'),
]
