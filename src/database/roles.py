"""
Independent variables with a reserved physical meaning.
"""

from enum import Enum
from typing import Union


class IndependentVariable(Enum):
    """Flow condition along which a coefficient grid can be sampled."""
    MACH = 'mach'
    ANGLE_OF_ATTACK = 'angle_of_attack'
    ANGLE_OF_SIDESLIP = 'angle_of_sideslip'
    REYNOLDS = 'reynolds'

    @classmethod
    def parse(cls, value: Union[str, 'IndependentVariable']) -> 'IndependentVariable':
        """Accept an enum member, its value, or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        aliases = {
            'alpha': cls.ANGLE_OF_ATTACK,
            'aoa': cls.ANGLE_OF_ATTACK,
            'beta': cls.ANGLE_OF_SIDESLIP,
            'sideslip': cls.ANGLE_OF_SIDESLIP,
            're': cls.REYNOLDS,
        }
        if key in aliases:
            return aliases[key]
        raise ValueError(f"Unknown independent variable: {value!r}")
