import re

# Spelling variants of the same place compare equal when scoring location.
LOCATION_ALIASES = {
    "bengaluru": "bangalore",
    "bangalore": "bangalore",
    "mumbai": "mumbai",
    "bombay": "mumbai",
    "delhi": "delhi",
    "new delhi": "delhi",
    "chennai": "chennai",
    "madras": "chennai",
    "kolkata": "kolkata",
    "calcutta": "kolkata",
    "gurugram": "gurgaon",
    "gurgaon": "gurgaon",
    "mysuru": "mysore",
    "mysore": "mysore",
    "mangaluru": "mangalore",
    "mangalore": "mangalore",
    "thiruvananthapuram": "trivandrum",
    "trivandrum": "trivandrum",
    "work from home": "remote",
    "wfh": "remote",
    "remote": "remote",
    "hybrid": "hybrid",
}

_SEPARATORS = re.compile(r"[\s\-_]+")


def normalize_location(location: str) -> str:
    loc = _SEPARATORS.sub(" ", location.strip().lower())
    return LOCATION_ALIASES.get(loc, loc)


def same_location(a: str, b: str) -> bool:
    return normalize_location(a) == normalize_location(b)
