import pytest

from s3signer.models import Credentials
from s3signer.request import build_request

from . import vectors


@pytest.fixture
def credentials():
    return Credentials(vectors.ACCESS_KEY_ID, vectors.SECRET_ACCESS_KEY, vectors.REGION)


@pytest.fixture
def get_object_request():
    return build_request("GET", vectors.GET_OBJECT_URL, vectors.GET_OBJECT_HEADERS)


@pytest.fixture
def put_object_request():
    return build_request("PUT", vectors.PUT_OBJECT_URL, vectors.PUT_OBJECT_HEADERS)
