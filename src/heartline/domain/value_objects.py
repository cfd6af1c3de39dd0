"""Value objects — self-validating domain primitives."""

from __future__ import annotations

from datetime import date
from enum import Enum

# (last month, last day) of each sign, in calendar order starting in January.
_SIGN_ENDINGS: list[tuple[int, int, str]] = [
    (1, 19, "Capricorn"),
    (2, 18, "Aquarius"),
    (3, 20, "Pisces"),
    (4, 19, "Aries"),
    (5, 20, "Taurus"),
    (6, 20, "Gemini"),
    (7, 22, "Cancer"),
    (8, 22, "Leo"),
    (9, 22, "Virgo"),
    (10, 22, "Libra"),
    (11, 21, "Scorpio"),
    (12, 21, "Sagittarius"),
]


class ZodiacSign(str, Enum):
    """Tropical sun sign."""

    ARIES = "Aries"
    TAURUS = "Taurus"
    GEMINI = "Gemini"
    CANCER = "Cancer"
    LEO = "Leo"
    VIRGO = "Virgo"
    LIBRA = "Libra"
    SCORPIO = "Scorpio"
    SAGITTARIUS = "Sagittarius"
    CAPRICORN = "Capricorn"
    AQUARIUS = "Aquarius"
    PISCES = "Pisces"

    @classmethod
    def from_birth_date(cls, birth_date: str | date) -> ZodiacSign:
        """Return the sun sign for an ISO date string or ``date``.

        Raises ``ValueError`` when *birth_date* is not an ISO date.
        """
        if isinstance(birth_date, str):
            birth_date = date.fromisoformat(birth_date.strip()[:10])

        for month, last_day, name in _SIGN_ENDINGS:
            if (birth_date.month, birth_date.day) <= (month, last_day):
                return cls(name)
        # 12-22 .. 12-31
        return cls.CAPRICORN
