"""Path parameter binding.

Zips a match's capture groups with the rule's param keys::

    keys   = (ParamKey("p1"), ParamKey("0"))
    groups = ("p1", "p2")
    bind_params(groups, keys)  # {"p1": "p1", "0": "p2"}
"""

from collections.abc import Sequence

from bluejacket.routing.rule import ParamKey


def bind_params(
    groups: Sequence[str | None],
    keys: Sequence[ParamKey],
) -> dict[str, str | None]:
    """Map each key name to the capture group at the same position.

    Optional groups that did not participate in the match bind ``None``.
    Returns a new dict; neither argument is modified.
    """
    params: dict[str, str | None] = {}
    for index, key in enumerate(keys):
        params[key.name] = groups[index] if index < len(groups) else None
    return params
