"""
Postal code to federal state mapping.

Coarse assignment by postal ranges; German postal areas do not follow
state borders exactly, so this is only good enough for pointing at
regional funding programs.
"""

from typing import Optional


def _prefix(postal_code: str, digits: int) -> Optional[int]:
    head = (postal_code or "").strip()[:digits]
    if len(head) < digits or not head.isdigit():
        return None
    return int(head)


def federal_state(postal_code: str) -> str:
    """
    Return the federal state for a postal code, or "" if unknown.
    """
    prefix = _prefix(postal_code, 2)
    if prefix is None:
        return ""

    if 1 <= prefix <= 9:
        p3 = _prefix(postal_code, 3)
        if p3 is not None and 10 <= p3 <= 19 and prefix <= 6:
            return "Sachsen"
        if p3 is not None and 20 <= p3 <= 29 and prefix <= 6:
            return "Brandenburg"
        return "Sachsen"
    if 10 <= prefix <= 19:
        return "Berlin"
    if 20 <= prefix <= 22:
        return "Hamburg"
    if 23 <= prefix <= 25:
        return "Schleswig-Holstein"
    if prefix in (26, 27, 29):
        return "Niedersachsen"
    if prefix == 28:
        return "Bremen"
    if 30 <= prefix <= 39:
        return "Niedersachsen"
    if 40 <= prefix <= 53 or 57 <= prefix <= 59:
        return "Nordrhein-Westfalen"
    if 54 <= prefix <= 56:
        return "Rheinland-Pfalz"
    if 60 <= prefix <= 65:
        return "Hessen"
    if prefix == 66:
        return "Saarland"
    if 67 <= prefix <= 79 or 88 <= prefix <= 89:
        return "Baden-Württemberg"
    if 80 <= prefix <= 87 or 90 <= prefix <= 97:
        return "Bayern"
    if 98 <= prefix <= 99:
        return "Thüringen"
    return ""
