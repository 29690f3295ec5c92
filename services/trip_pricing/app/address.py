import re

# Trailing street number, e.g. "Rua das Flores, 123".
_TRAILING_NUMBER = re.compile(r"(.*?)[,\s]+\d+")


def normalize(address: str) -> str:
    """Drop a trailing street number so the geocoder matches the street itself.

    >>> normalize("Rua das Flores, 123")
    'Rua das Flores'
    """

    cleaned = address.strip()
    match = _TRAILING_NUMBER.fullmatch(cleaned)
    if match:
        return match.group(1)
    return cleaned
