"""
Version Normalization

Turns loosely specified Java version strings ("1.8", "14-ea", "11") into npm-style
semver ranges and evaluates versions against them.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

import semantic_version

from javafetch.exceptions import InvalidVersionSpec
from javafetch.log_utils import logger

LEGACY_MAJOR_PREFIX = "1."
EARLY_ACCESS_SUFFIX = "-ea"
WILDCARD_MARKERS = ("x", "X", "*")

_COERCE_RX = re.compile(r"(\d+)(?:\.(\d+))?(?:\.(\d+))?")


@dataclass(frozen=True)
class VersionSpec:
    """
    A validated semver range derived from user input.

    Construction fails with InvalidVersionSpec when `raw` is not a valid npm range, so
    every instance can be matched against.
    """

    raw: str
    matcher: semantic_version.NpmSpec = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        try:
            matcher = semantic_version.NpmSpec(self.raw)
        except ValueError as e:
            raise InvalidVersionSpec(
                f"The version {self.raw} is not valid semver notation. "
                "Use a version such as '11', '11.0.2', '1.8' or '15-ea'.",
                value=self.raw,
                details=str(e),
            ) from e
        object.__setattr__(self, "matcher", matcher)

    def __str__(self) -> str:
        return self.raw

    def satisfied_by(self, version: str) -> bool:
        """Return True when `version` parses as semver and falls inside the range."""
        parsed = parse_version(version)
        if parsed is None:
            return False
        return self.matcher.match(parsed)

    def max_satisfying(self, versions: Iterable[str]) -> Optional[str]:
        """
        Return the highest version string in `versions` inside the range.

        Equal versions keep the first occurrence; unparseable entries are ignored.
        """
        best: Optional[str] = None
        best_parsed: Optional[semantic_version.Version] = None
        for candidate in versions:
            parsed = parse_version(candidate)
            if parsed is None or not self.matcher.match(parsed):
                continue
            if best_parsed is None or parsed > best_parsed:
                best, best_parsed = candidate, parsed
        return best


def parse_version(version: Optional[str]) -> Optional[semantic_version.Version]:
    """Parse a strict semver string, returning None when it is not one."""
    if not version:
        return None
    try:
        return semantic_version.Version(version.strip())
    except ValueError:
        return None


def coerce_version(text: Optional[str]) -> Optional[str]:
    """
    Extract the first `major[.minor[.patch]]` group from free-form text.

    Missing components are filled with zero and anything after the patch number is
    dropped, so "11.0.9.1" becomes "11.0.9" and "8" becomes "8.0.0".
    """
    if text is None:
        return None
    match = _COERCE_RX.search(str(text))
    if not match:
        return None
    major, minor, patch = (int(part or 0) for part in match.groups())
    return f"{major}.{minor}.{patch}"


def normalize_version(raw: str) -> VersionSpec:
    """
    Normalize a user-supplied Java version into a semver range.

    Rules, applied in order:
    1. A leading "1." is dropped ("1.8" -> "8"); nothing may be left empty.
    2. An "-ea" suffix is kept: "14-ea" becomes "14.0.0-ea", and numeric early-access
       versions become ">=" ranges because prereleases do not match wildcards.
    3. Other versions with fewer than three components get ".x" appended unless they
       already end in a wildcard.

    Raises:
        InvalidVersionSpec: When the input is blank or the result is not a valid range.
    """
    if raw is None or not str(raw).strip():
        raise InvalidVersionSpec(
            "A Java version is required, e.g. '11' or '1.8'", value=raw
        )
    version = str(raw).strip()

    if version.startswith(LEGACY_MAJOR_PREFIX):
        version = version[len(LEGACY_MAJOR_PREFIX) :]
        if not version:
            raise InvalidVersionSpec(
                f"{LEGACY_MAJOR_PREFIX} is not a valid version", value=raw
            )

    if version.endswith(EARLY_ACCESS_SUFFIX):
        if "." not in version:
            version = version[: -len(EARLY_ACCESS_SUFFIX)] + ".0.0" + EARLY_ACCESS_SUFFIX
        if version[0].isdigit():
            version = ">=" + version
    elif len(version.split(".")) < 3 and not version.endswith(WILDCARD_MARKERS):
        version = version + ".x"

    try:
        spec = VersionSpec(version)
    except InvalidVersionSpec as e:
        raise InvalidVersionSpec(
            f"The version '{raw}' (normalized to '{version}') is not valid semver notation. "
            "Use a version such as '11', '11.0.2', '1.8' or '15-ea'.",
            value=raw,
            details=e.details,
        ) from e
    logger.debug(f"Normalized Java version '{raw}' to range '{spec}'")
    return spec
