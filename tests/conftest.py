import os
import pytest
from api_endpoint.app import create_app
from api_endpoint import buildinfo

FIXTURES = os.path.join(os.path.dirname(__file__), 'fixtures')
API_PATH = os.path.join(FIXTURES, 'publish_carousel_api.yml')
NO_INFO_API_PATH = os.path.join(FIXTURES, 'no_info_api.yml')

@pytest.fixture
def api_yml_path():
    return API_PATH

@pytest.fixture
def api_yml(api_yml_path):
    with open(api_yml_path, 'rb') as f:
        return f.read()

@pytest.fixture
def no_info_api_yml():
    with open(NO_INFO_API_PATH, 'rb') as f:
        return f.read()

@pytest.fixture
def app(api_yml_path):
    flask_app = create_app({
        "TESTING": True,
        "API_YML": api_yml_path,
        "API_PATH": "/__api",
        "API_FORWARDED_URL_HEADER": "X-Original-Request-URL",
    })
    yield flask_app

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture(autouse=True)
def restore_build_info():
    """Put the process-wide build info back after tests that change it."""
    original = buildinfo.get_build_info()
    yield
    buildinfo.set_build_info(original)
