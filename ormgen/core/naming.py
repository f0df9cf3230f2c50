"""
Identifier derivation for generated code.

Schema names (``created_at``, ``blogPost``, ``order-line``) are split into
lowercase words once and reassembled in whatever case the generated
identifier needs. Names colliding with Python keywords get a suffix.
"""

import re
from enum import Enum
from typing import Dict, Iterable, List, Tuple


class NamingCase(Enum):
    """Identifier styles used in generated code."""
    SNAKE_CASE = "snake"      # created_at
    PASCAL_CASE = "pascal"    # CreatedAt
    SCREAMING_SNAKE = "screaming_snake"  # CREATED_AT


PYTHON_RESERVED_WORDS = frozenset({
    'and', 'as', 'assert', 'async', 'await', 'break', 'case', 'class',
    'continue', 'def', 'del', 'elif', 'else', 'except', 'false', 'finally',
    'for', 'from', 'global', 'if', 'import', 'in', 'is', 'lambda', 'match',
    'none', 'nonlocal', 'not', 'or', 'pass', 'raise', 'return', 'true',
    'try', 'while', 'with', 'yield',
})

# Only reserved for class names; a column called "type" is a fine accessor
PYTHON_BUILTIN_TYPES = frozenset({
    'bool', 'bytearray', 'bytes', 'complex', 'dict', 'float', 'frozenset',
    'int', 'list', 'object', 'set', 'str', 'tuple', 'type',
})

_WORD_BOUNDARY = re.compile(r"[^A-Za-z0-9]+|(?<=[a-z0-9])(?=[A-Z])")


def split_words(name: str) -> List[str]:
    """
    Split a schema name into lowercase words.

    >>> split_words("blogPost_ID")
    ['blog', 'post', 'id']
    """
    return [word.lower() for word in _WORD_BOUNDARY.split(name) if word]


def join_words(words: Iterable[str], target_case: NamingCase) -> str:
    if target_case is NamingCase.PASCAL_CASE:
        return "".join(word.capitalize() for word in words)
    joined = "_".join(words)
    if target_case is NamingCase.SCREAMING_SNAKE:
        return joined.upper()
    return joined


class NameSanitizer:
    """
    Turns schema names into valid Python identifiers.

    Results are memoized and depend only on the input, so the same column
    maps to the same identifier in every builder and every thread.
    """

    def __init__(self, reserved_words: Iterable[str] = (), suffix: str = "_"):
        """
        Args:
            reserved_words: Lowercase names that must not be produced as-is
            suffix: Appended to a name that collides with a reserved word
        """
        self.reserved_words = frozenset(reserved_words)
        self.suffix = suffix
        self._cache: Dict[Tuple[str, NamingCase], str] = {}

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.SNAKE_CASE) -> str:
        key = (name, target_case)
        identifier = self._cache.get(key)
        if identifier is None:
            identifier = self._derive(name, target_case)
            self._cache[key] = identifier
        return identifier

    def _derive(self, name: str, target_case: NamingCase) -> str:
        identifier = join_words(split_words(name) or ["column"], target_case)
        if identifier[0].isdigit():
            identifier = f"_{identifier}"
        if identifier.lower() in self.reserved_words:
            identifier += self.suffix
        return identifier


def create_python_sanitizer() -> NameSanitizer:
    """Sanitizer for class names: keywords and builtin types are avoided."""
    return NameSanitizer(PYTHON_RESERVED_WORDS | PYTHON_BUILTIN_TYPES)


def create_attribute_sanitizer() -> NameSanitizer:
    """Sanitizer for attributes and accessors: only keywords are avoided."""
    return NameSanitizer(PYTHON_RESERVED_WORDS)


_class_sanitizer = create_python_sanitizer()
_attribute_sanitizer = create_attribute_sanitizer()
_constant_sanitizer = NameSanitizer()


def sanitize_python_class_name(name: str) -> str:
    return _class_sanitizer.sanitize_name(name, NamingCase.PASCAL_CASE)


def sanitize_python_field_name(name: str) -> str:
    return _attribute_sanitizer.sanitize_name(name, NamingCase.SNAKE_CASE)


def sanitize_constant_name(name: str) -> str:
    return _constant_sanitizer.sanitize_name(name, NamingCase.SCREAMING_SNAKE)
