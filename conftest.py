import pytest
from envsubst.lib.expand.resolvers import MappingResolver


@pytest.fixture
def resolver() -> MappingResolver:
    return MappingResolver(
        {
            "VAR": "abcdef",
            "PATHNAME": "/a/b/c",
            "WORD": "foo",
            "LOWER": "abc",
            "UPPER": "ABC",
            "EMPTY": "",
            "OTHER": "y",
        }
    )
