import django
import pytest
from django.conf import settings

if not settings.configured:
    settings.configure(
        DEBUG=True,
        SECRET_KEY="clique-explorer-tests",
        ALLOWED_HOSTS=["*"],
        ROOT_URLCONF="clique_explorer.urls",
        INSTALLED_APPS=["clique_explorer.explorer"],
        MIDDLEWARE=[],
        USE_TZ=True,
        CLIQUE_VIEWER_GRAPH=None,
        CLIQUE_VIEWER_CLIQUES=None,
        CLIQUE_VIEWER_AUTOSTART=False,
    )
    django.setup()


@pytest.fixture
def path_graph_data():
    # 0 - 1 - 2
    return {0: [1], 1: [0, 2], 2: [1]}


@pytest.fixture
def square_graph_data():
    # complete graph on four vertices, listed in adjacency order
    return {
        "0": ["1", "2", "3"],
        "1": ["0", "2", "3"],
        "2": ["0", "1", "3"],
        "3": ["0", "1", "2"],
    }


@pytest.fixture
def square_clique_data():
    return {
        "2": [[0, 1], [2, 3]],
        "3": [[0, 1, 2]],
        "4": [[0, 1, 2, 3]],
    }
