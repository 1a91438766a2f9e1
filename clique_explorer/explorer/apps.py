from django.apps import AppConfig


class ExplorerConfig(AppConfig):
    name = "clique_explorer.explorer"
    label = "explorer"
