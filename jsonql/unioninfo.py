"""Union information about inconsistent JSON objects.

Objects stored under the same key do not always carry the same fields.
Take the three "address" objects in this document:

    {
        "parents": [
            {"name": "John", "address": {"city": "New York", "phone": "123-456-7890"}},
            {"name": "Jane", "address": {"city": "New York", "street": "123 Main St"}}
        ],
        "address": {"city": "New York", "zip": 10001}
    }

Scanning it records the subfields city, phone, street and zip under the
bare key "address", so the generated "Address" type exposes all four no
matter which occurrence it is built from.

The registry is keyed by bare name only. Two unrelated fields sharing a
name anywhere in the document are unioned together.
"""

from typing import Any, Dict, Iterator, List, Tuple


class UnionRegistry:
    """Maps a bare key to the subfields seen under it and whether each was ever an object."""

    def __init__(self):
        self._keys: Dict[str, Dict[str, bool]] = {}

    def record(self, key: str, subkey: str, is_object: bool) -> None:
        """Records a subfield. An object flag, once set, is never cleared."""
        subkeys = self._keys.setdefault(key, {})
        subkeys[subkey] = subkeys.get(subkey, False) or is_object

    def ensure(self, key: str) -> None:
        self._keys.setdefault(key, {})

    def subkeys(self, key: str) -> Dict[str, bool]:
        return dict(self._keys.get(key, {}))

    def subkey_exists(self, key: str, subkey: str) -> bool:
        return subkey in self._keys.get(key, {})

    def is_object(self, key: str, subkey: str) -> bool:
        return self._keys.get(key, {}).get(subkey, False)

    def __contains__(self, key: str) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def items(self) -> Iterator[Tuple[str, Dict[str, bool]]]:
        for key, subkeys in self._keys.items():
            yield key, dict(subkeys)

    def debug_lines(self) -> List[str]:
        """Renders the registry as sorted 'key : subkey' lines."""
        lines = []
        for key in sorted(self._keys):
            for subkey in sorted(self._keys[key]):
                marker = ' isObject' if self._keys[key][subkey] else ''
                lines.append(f"{key} : {subkey}{marker}")
        return lines


def collect_union_info(document: Any, registry: UnionRegistry) -> UnionRegistry:
    """Scans a whole document and records union information.

    Every object node is visited, including objects inside arrays, with no
    depth limit. The walk uses an explicit stack, so arbitrarily deep
    documents do not hit the interpreter's recursion limit.

    Args:
        document: The decoded JSON document
        registry: Registry to populate

    Returns:
        The populated registry
    """
    stack: List[Any] = [document]
    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            for key, value in node.items():
                if isinstance(value, dict):
                    registry.ensure(key)
                    for subkey, subvalue in value.items():
                        registry.record(key, subkey, isinstance(subvalue, dict))
                if isinstance(value, (dict, list)):
                    stack.append(value)
        elif isinstance(node, list):
            stack.extend(item for item in node if isinstance(item, (dict, list)))
    return registry
