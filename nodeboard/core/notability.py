"""Decides which project runs get a completion line.

The engine issues many inner project requests purely for IDE support and
cross-targeting introspection.  Those are noise to a person watching the
build; any other explicit target request is assumed to be meaningful.
"""

from __future__ import annotations

# Hand-maintained: exact target-list values that mark an introspection query.
NON_NOTABLE_TARGETS: frozenset[str] = frozenset(
    {
        "GetTargetFrameworks",
        "GetNativeManifest",
        "GetCopyToOutputDirectoryItems",
    }
)


def is_notable(requested_targets: str) -> bool:
    """Return ``True`` if a project run with these requested targets should be reported.

    An empty target list is an outer/default build request and is always
    notable.  Only an exact match against ``NON_NOTABLE_TARGETS`` is
    suppressed; lists that merely contain one of them are still notable.
    """
    if requested_targets == "":
        return True
    return requested_targets not in NON_NOTABLE_TARGETS
