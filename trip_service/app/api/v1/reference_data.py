from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...config import ReferenceData, get_reference_data


router = APIRouter()


class ReferenceDataResponse(BaseModel):
    tags: list[str]
    cities: list[str]


@router.get(
    "",
    response_model=ReferenceDataResponse,
    summary="선택 가능한 태그/여행지 목록",
)
def get_reference_data_lists(
    reference: ReferenceData = Depends(get_reference_data),
) -> ReferenceDataResponse:
    return ReferenceDataResponse(
        tags=sorted(reference.tags),
        cities=sorted(reference.cities),
    )
