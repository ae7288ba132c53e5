"""
Request and response models for the HTTP API.
"""
from typing import Optional

from pydantic import BaseModel


class PolicyInfo(BaseModel):
    name: str
    description: str = ""
    normalizes: bool = False
    ordered: bool = False


class ValidateRequest(BaseModel):
    value: str


class ValidateResponse(BaseModel):
    policy: str
    valid: bool
    raw: Optional[str] = None
    comparison_key: Optional[str] = None


class CompareRequest(BaseModel):
    lhs: str
    rhs: str


class CompareResponse(BaseModel):
    policy: str
    equal: bool
    lhs_before_rhs: Optional[bool] = None  # None when the policy has no order


class HealthResponse(BaseModel):
    status: str = "ok"
