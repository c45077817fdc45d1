"""Shared pytest fixtures."""

from tests.fixtures.aws_fixtures import (  # noqa: F401
    aws_credentials,
    client,
    mocked_aws,
    s3_client,
    test_settings,
)
from tests.fixtures.storage_fixtures import (  # noqa: F401
    fake_client,
    fake_store,
    make_fake_client,
)
