from typing import Any, Mapping

from pydantic.fields import FieldInfo


def fold_keys(values: Any, fields: Mapping[str, FieldInfo]) -> Any:
    """
    Rename incoming keys that match a field name or alias ignoring case.

    Exact matches win; unknown keys are left as they are. Non-mapping input
    is returned untouched for pydantic to reject.
    """
    if not isinstance(values, Mapping):
        return values

    lookup: dict[str, str] = {}
    for name, field in fields.items():
        target = field.alias or name
        lookup.setdefault(name.lower(), target)
        lookup.setdefault(target.lower(), target)

    folded: dict[str, Any] = {}
    for key, value in values.items():
        if not isinstance(key, str):
            folded[key] = value
            continue
        target = key if key in lookup.values() else lookup.get(key.lower(), key)
        if target in folded and target != key:
            continue
        folded[target] = value
    return folded
