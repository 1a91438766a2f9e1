"""Django settings for the clique explorer web control surface."""

import os

DEBUG = os.environ.get("CLIQUE_VIEWER_DEBUG", "0") in {"1", "true", "yes", "on"}
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "clique-explorer-dev-key")
ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")

ROOT_URLCONF = "clique_explorer.urls"
WSGI_APPLICATION = "clique_explorer.wsgi.application"

INSTALLED_APPS = [
    "clique_explorer.explorer",
]

MIDDLEWARE = [
    "django.middleware.common.CommonMiddleware",
]

USE_TZ = True

# Data files for the viewer (.json or exported .js)
CLIQUE_VIEWER_GRAPH = os.environ.get("CLIQUE_VIEWER_GRAPH")
CLIQUE_VIEWER_CLIQUES = os.environ.get("CLIQUE_VIEWER_CLIQUES")
CLIQUE_VIEWER_AUTOSTART = True

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "root": {"handlers": ["console"], "level": os.environ.get("CLIQUE_VIEWER_LOG_LEVEL", "INFO")},
}
