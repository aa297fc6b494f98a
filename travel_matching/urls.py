from django.urls import path
from . import views

app_name = 'matching'

urlpatterns = [
    # API endpoints
    path('api/matches/', views.match_list, name='api_matches'),
    path('api/matches/<uuid:match_id>/', views.match_detail, name='api_match'),
    path('api/discover/', views.discover_matches, name='api_discover'),

    # Match lifecycle
    path('api/matches/<uuid:match_id>/accept/', views.accept_match, name='api_accept'),
    path('api/matches/<uuid:match_id>/decline/', views.decline_match, name='api_decline'),
    path('api/matches/<uuid:match_id>/connect/', views.connect_match, name='api_connect'),
]
