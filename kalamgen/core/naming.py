"""
Naming utilities for generated identifiers.

Pure string transforms shared by the IR builder and the generators.
Only case and underscore boundaries are recognised; runs of letters
without either are never split.
"""


def _recase_first(name: str, converted: str) -> str:
    # Multi-character mappings ('ß' -> 'SS') keep the original character
    if len(converted) != 1:
        converted = name[0]
    return converted + name[1:]


def lower_first(name: str) -> str:
    """Lower only the first character: ``SendMessage`` -> ``sendMessage``."""
    if not name:
        return name
    return _recase_first(name, name[0].lower())


def upper_first(name: str) -> str:
    """Upper only the first character; the length never changes."""
    if not name:
        return name
    return _recase_first(name, name[0].upper())


def lower_camel(name: str) -> str:
    """
    Convert an underscore separated name to camel case.

    The first segment is kept as-is; every later segment gets its first
    character uppercased. Empty segments (from doubled underscores) vanish.

        >>> lower_camel("user_id")
        'userId'
        >>> lower_camel("a__b")
        'aB'
    """
    parts = name.split("_")
    return parts[0] + "".join(upper_first(part) for part in parts[1:] if part)


def to_snake_case(name: str) -> str:
    """
    Insert ``_`` before every uppercase character except the first, then
    lowercase everything.

        >>> to_snake_case("GetUser")
        'get_user'
    """
    chars = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            chars.append("_")
        chars.append(lower_first(char))
    return "".join(chars)


def type_prefix(package: str) -> str:
    """
    Build the flat-namespace prefix for a proto package.

    ``a.b`` -> ``A_B_``; the empty package yields ``""``.
    """
    if not package:
        return ""
    parts = [upper_first(part) for part in package.split(".")]
    return "_".join(parts) + "_"
