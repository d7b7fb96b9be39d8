import pytest

from javafetch.exceptions import (
    CatalogError,
    CatalogUnavailable,
    DownloadOrExtractFailure,
    HTTPError,
    InvalidVersionSpec,
    JavafetchError,
    NoBinaryForPlatform,
    NoSatisfyingVersion,
    ResolutionError,
    ValidationError,
)

pytestmark = pytest.mark.unit


def test_str_includes_details():
    assert str(JavafetchError("Failed", details="why")) == "Failed - why"
    assert str(JavafetchError("Failed")) == "Failed"


@pytest.mark.parametrize(
    "error, parent",
    [
        (InvalidVersionSpec("bad", value="1."), ValidationError),
        (HTTPError("boom", status_code=500), CatalogError),
        (CatalogUnavailable("down"), CatalogError),
        (NoSatisfyingVersion("11.x", []), ResolutionError),
        (NoBinaryForPlatform("none"), ResolutionError),
        (DownloadOrExtractFailure("bad", url="https://x"), JavafetchError),
    ],
)
def test_hierarchy(error, parent):
    assert isinstance(error, parent)
    assert isinstance(error, JavafetchError)


def test_no_satisfying_version_message():
    error = NoSatisfyingVersion("11.x", ["8.0.275", "15.0.1"])

    assert str(error) == (
        "Could not find satisfied version for semver 11.x - "
        "Available versions: 8.0.275, 15.0.1"
    )
