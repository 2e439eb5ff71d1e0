"""Typed-data revisions and the check that a call supports the requested one."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum


class SignTypedDataVersion(str, Enum):
    """Typed-data revision. A ``str`` enum, so plain ``"V4"`` compares equal."""

    V1 = "V1"
    V3 = "V3"
    V4 = "V4"

    def __str__(self) -> str:
        return self.value


def validate_version(
    version: SignTypedDataVersion | str,
    allowed_versions: Iterable[SignTypedDataVersion] | None = None,
) -> SignTypedDataVersion:
    """
    Resolve ``version`` to a ``SignTypedDataVersion`` and check it is allowed.

    Args:
        version: Enum member or its string value.
        allowed_versions: Versions accepted by the caller; None accepts all.

    Returns:
        The enum member.

    Raises:
        ValueError: Unknown or disallowed version.
    """
    try:
        resolved = SignTypedDataVersion(version)
    except ValueError:
        raise ValueError(f"Invalid version: '{version}'") from None
    if allowed_versions is not None:
        allowed = tuple(allowed_versions)
        if resolved not in allowed:
            raise ValueError(
                f"SignTypedDataVersion not allowed: '{resolved.value}'. "
                f"Allowed versions are: {', '.join(v.value for v in allowed)}"
            )
    return resolved


STRUCTURED_VERSIONS: tuple[SignTypedDataVersion, ...] = (
    SignTypedDataVersion.V3,
    SignTypedDataVersion.V4,
)

__all__: tuple[str, ...] = (
    "STRUCTURED_VERSIONS",
    "SignTypedDataVersion",
    "validate_version",
)
