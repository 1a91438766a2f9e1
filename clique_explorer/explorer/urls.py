from django.urls import path

from . import views

app_name = "explorer"

urlpatterns = [
    path("", views.index, name="index"),
    path("api/selector/", views.selector_api, name="selector-api"),
    path("api/frame/", views.frame_api, name="frame-api"),
    path("api/catalog/", views.catalog_api, name="catalog-api"),
]
