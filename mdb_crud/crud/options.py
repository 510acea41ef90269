"""
Translation of generic query options into aggregation stages.
"""

from typing import Any

from ..constants import WRITE_OPTION_KEYS


def handle_generic_options(options: dict[str, Any] | None) -> list[dict[str, Any]]:
    """
    Build ``$sort``/``$skip``/``$limit`` stages from an options mapping.

    Stages are always emitted in that order. A missing, zero or empty value
    produces no stage. Any other key in ``options`` is ignored.

    Args:
        options: Mapping with optional ``sort``, ``skip`` and ``limit`` keys

    Returns:
        List of aggregation stages (possibly empty)
    """
    stages: list[dict[str, Any]] = []
    if not options:
        return stages

    if options.get("sort"):
        stages.append({"$sort": options["sort"]})

    if options.get("skip"):
        stages.append({"$skip": options["skip"]})

    if options.get("limit"):
        stages.append({"$limit": options["limit"]})

    return stages


def write_options(
    options: dict[str, Any] | None,
    allowed: tuple[str, ...] = WRITE_OPTION_KEYS,
) -> dict[str, Any]:
    """Keep only the option keys the driver accepts on write methods."""
    if not options:
        return {}
    return {key: value for key, value in options.items() if key in allowed}
