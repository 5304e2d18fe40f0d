from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/auth/', include('authentication.urls')),
    path('api/user/', include('profiles.urls')),
    path('api/user/', include('contacts.urls')),
    path('api/chat/', include('chat.urls')),
]
