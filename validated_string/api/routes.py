"""
FastAPI API routes:
- GET  /v1/policies
- POST /v1/policies/{name}/validate
- POST /v1/policies/{name}/compare
"""
from fastapi import APIRouter, HTTPException

from validated_string.core import OrderedValidatedString, Policy, validated_type
from validated_string.logging_config import get_logger
from validated_string.models import (
    CompareRequest, CompareResponse, PolicyInfo, ValidateRequest, ValidateResponse,
)
from validated_string.registry import UnknownPolicyError, get_policy, list_policies

logger = get_logger("api")
router = APIRouter()


def _resolve(name: str) -> Policy:
    try:
        return get_policy(name)
    except UnknownPolicyError:
        raise HTTPException(status_code=404, detail=f"Policy {name} not found")


@router.get("/v1/policies", response_model=list[PolicyInfo])
async def get_policies():
    return [
        PolicyInfo(
            name=p.name,
            description=p.description,
            normalizes=p.normalizes,
            ordered=p.ordered,
        )
        for p in list_policies()
    ]


@router.post("/v1/policies/{name}/validate", response_model=ValidateResponse)
async def validate_value(name: str, body: ValidateRequest):
    """Run a value through a policy; rejection is a normal response."""
    cls = validated_type(_resolve(name))
    value = cls.try_create(body.value)
    if value is None:
        return ValidateResponse(policy=name, valid=False)

    return ValidateResponse(
        policy=name,
        valid=True,
        raw=value.raw,
        comparison_key=value.comparison_key,
    )


@router.post("/v1/policies/{name}/compare", response_model=CompareResponse)
async def compare_values(name: str, body: CompareRequest):
    cls = validated_type(_resolve(name))
    lhs = cls.try_create(body.lhs)
    rhs = cls.try_create(body.rhs)
    if lhs is None or rhs is None:
        side = "lhs" if lhs is None else "rhs"
        raise HTTPException(status_code=422, detail=f"{side} rejected by policy {name}")

    before = None
    if isinstance(lhs, OrderedValidatedString):
        before = lhs < rhs

    logger.debug("values_compared", policy=name)
    return CompareResponse(policy=name, equal=lhs == rhs, lhs_before_rhs=before)
