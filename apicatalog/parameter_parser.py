"""
Parameter line parser for API documentation.

Parses single list items from a "Parameters:" (or "Properties:") section.

Format:
- name (type) - description
- amount (number) - (optional) amount to use
- callback (function)
"""

from __future__ import annotations

import re
from typing import Optional

from .models import ParameterDescriptor, PropertyDescriptor

# Name runs up to the first "(", the type is the first parenthesized group
PARAMETER_PATTERN = re.compile(r'^- ([^(]+)\(([^)]+)\)\s*-?\s*(.*)$')
OPTIONAL_MARKER = "(optional)"


def _match(line: str) -> Optional[re.Match]:
    return PARAMETER_PATTERN.match(line.strip())


def parse_parameter(line: str) -> Optional[ParameterDescriptor]:
    """Parse one parameter list item.

    Args:
        line: Trimmed markdown line starting with "- "

    Returns:
        ParameterDescriptor, or None if the line has no parenthesized type

    Example:
        >>> param = parse_parameter("- amount (number) - (optional) amount to use")
        >>> param.name, param.type, param.optional
        ('amount', 'number', True)
        >>> parse_parameter("- foo - a description") is None
        True
    """
    match = _match(line)
    if not match:
        return None

    return ParameterDescriptor(
        name=match.group(1).strip(),
        type=match.group(2).strip(),
        description=match.group(3).strip(),
        optional=OPTIONAL_MARKER in line.lower(),
    )


def parse_property(line: str) -> Optional[PropertyDescriptor]:
    """Parse one property list item (same shape as a parameter)."""
    match = _match(line)
    if not match:
        return None

    return PropertyDescriptor(
        name=match.group(1).strip(),
        type=match.group(2).strip(),
        description=match.group(3).strip(),
    )


if __name__ == "__main__":
    samples = [
        "- ms (number) - milliseconds to sleep",
        "- amount (number) - (optional) amount to use",
        "- callback (function)",
        "- foo - a description",
    ]

    for sample in samples:
        param = parse_parameter(sample)
        if param:
            print(f"✓ {sample}")
            print(f"  name={param.name!r} type={param.type!r} optional={param.optional}")
            print(f"  description={param.description!r}")
        else:
            print(f"✗ {sample} (not a parameter line)")
