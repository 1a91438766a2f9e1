from django.urls import include, path

urlpatterns = [
    path("", include("clique_explorer.explorer.urls")),
]
