"""
Brazilian license plates (old format, "ABC-1234").

Canonical form is uppercase without separators: "ABC1234".
"""
import re
from typing import Optional

from validated_string.core import Policy, validated_type

PLATE_RE = re.compile(r"[a-zA-Z]{3}[- ]?[0-9]{4}")


def validate_plate(value: str) -> Optional[str]:
    plate = value.strip()
    if not PLATE_RE.fullmatch(plate):
        return None
    return plate.replace(" ", "").replace("-", "").upper()


LICENSE_PLATE_POLICY = Policy(
    name="br_license_plate",
    description="Brazilian license plate, three letters and four digits",
    validate=validate_plate,
)

BRLicensePlate = validated_type(LICENSE_PLATE_POLICY, name="BRLicensePlate", module=__name__)
