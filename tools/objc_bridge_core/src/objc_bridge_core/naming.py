from __future__ import annotations

import re

OWNED_PREFIXES = ("alloc", "new", "copy", "mutableCopy")
INIT_PREFIX = "init"
NEW_PREFIX = "new"


def underscore(value: str) -> str:
    text = value.replace("::", "/")
    text = re.sub(r"([A-Z\d]+)([A-Z][a-z])", r"\1_\2", text)
    text = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", text)
    return text.replace("-", "_").lower()


def upcase_first(value: str) -> str:
    return value[:1].upper() + value[1:]


def selector_base_name(selector: str) -> str:
    return selector.split(":", 1)[0]


def selector_method_name(selector: str) -> str:
    text = selector[:-1] if selector.endswith(":") else selector
    return underscore(text.replace(":", "_"))


def constructor_name(selector: str) -> str:
    base = selector_base_name(selector)
    if base.startswith(INIT_PREFIX):
        base = NEW_PREFIX + base[len(INIT_PREFIX):]
    return underscore(base)


def returns_owned(selector: str) -> bool:
    """Whether a selector hands the caller an already-retained object.

    Follows the Cocoa memory-management naming rule: the base name must start
    with one of ``OWNED_PREFIXES`` and the prefix must end a camelCase word.
    """
    base = selector_base_name(selector)
    for prefix in OWNED_PREFIXES:
        if not base.startswith(prefix):
            continue
        rest = base[len(prefix):]
        if not rest or not rest[0].islower():
            return True
    return False
