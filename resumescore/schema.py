from typing import Any, Dict, List

REQUIRED_STR_FIELDS = ["id", "tenant_id", "title"]
OPTIONAL_STR_FIELDS = [
    "department",
    "location",
    "description",
    "status",
]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def validate_opening(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Checks the job opening JSON accepted by the `add-opening` command.
    """
    errors: List[str] = []

    for f in REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    for f in OPTIONAL_STR_FIELDS:
        if f in data and data[f] is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    skills = data.get("required_skills", [])
    if not isinstance(skills, list):
        errors.append("Field 'required_skills' must be a list of strings")
    elif not all(_is_non_empty_str(s) for s in skills):
        errors.append("Field 'required_skills' must contain only non-empty strings")

    experience = data.get("required_experience", 0)
    if isinstance(experience, bool) or not isinstance(experience, (int, float)):
        errors.append("Field 'required_experience' must be a number")
    elif experience < 0:
        errors.append("Field 'required_experience' must not be negative")

    return errors
