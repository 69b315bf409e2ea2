from django.urls import include, path

urlpatterns = [
    path('api/console/', include('console.urls')),
]
