from django.urls import include, path

urlpatterns = [
    path("", include("flashcards.api.urls")),
]
