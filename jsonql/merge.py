"""Deep merge of sibling JSON objects into one representative sample."""

from typing import Any, Dict, List, Sequence, Tuple


def merge_objects(samples: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    """Merges a sequence of JSON objects into their superset.

    Keys are visited in sample order. A key found in one sample keeps its
    value. A key found in several samples is merged recursively when every
    value is an object; otherwise the value from the last sample holding
    the key wins. The samples are not modified. Nested merges are worked
    off an explicit stack, so the depth of the samples is not bounded by
    the interpreter's recursion limit.

    Args:
        samples: JSON objects, usually the elements of one array

    Returns:
        A new object carrying every key seen in any sample
    """
    merged: Dict[str, Any] = {}
    pending: List[Tuple[Dict[str, Any], Sequence[Dict[str, Any]]]] = [(merged, samples)]
    while pending:
        target, group = pending.pop()
        occurrences: Dict[str, List[Any]] = {}
        for sample in group:
            for key, value in sample.items():
                occurrences.setdefault(key, []).append(value)

        for key, values in occurrences.items():
            if len(values) == 1:
                target[key] = values[0]
            elif all(isinstance(value, dict) for value in values):
                target[key] = {}
                pending.append((target[key], values))
            else:
                target[key] = values[-1]
    return merged
