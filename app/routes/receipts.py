# app/routes/receipts.py

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..errors import PointsOutOfRange
from ..schemas import (
    FieldError, NotFoundResponse, PointsResponse, ReceiptIdResponse, ValidationErrorResponse,
)
from ..services.receipts import lookup, process_receipt
from ..storage import ScoreStore, get_store

router = APIRouter(prefix="/receipts", tags=["receipts"])

NOT_FOUND_MESSAGE = "No receipt found for that id"


@router.post(
    "/process",
    response_model=ReceiptIdResponse,
    responses={400: {"model": ValidationErrorResponse, "description": "The receipt is invalid."}},
)
async def process(request: Request, store: ScoreStore = Depends(get_store)):
    try:
        payload = await request.json()
    except ValueError:
        err = FieldError(path="", msg="Request body must be valid JSON")
        return JSONResponse(status_code=400, content=ValidationErrorResponse(errors=[err]).model_dump(mode="json"))

    try:
        receipt_id, result = process_receipt(payload, store)
    except PointsOutOfRange as e:
        err = FieldError(path="", msg=str(e))
        return JSONResponse(status_code=400, content=ValidationErrorResponse(errors=[err]).model_dump(mode="json"))

    if receipt_id is None:
        body = ValidationErrorResponse(errors=result.errors)
        return JSONResponse(status_code=400, content=body.model_dump(mode="json"))
    return ReceiptIdResponse(id=receipt_id)


@router.get(
    "/{receipt_id}/points",
    response_model=PointsResponse,
    responses={404: {"model": NotFoundResponse, "description": "No receipt found for that id."}},
)
def points(receipt_id: str, store: ScoreStore = Depends(get_store)):
    found = lookup(receipt_id, store)
    if found is None:
        return JSONResponse(status_code=404, content={"error": NOT_FOUND_MESSAGE})
    return PointsResponse(points=found)
