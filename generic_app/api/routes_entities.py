from typing import Any, Dict
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile
from generic_app.api.dependencies import get_actions, get_crud
from generic_app.crud.engine import EntityActions
from generic_app.crud.service import CRUDService
from generic_app.crud.types import ActionResult, ResultKind, SubmittedFile
from generic_app.schemas.entities import ActionResponse, EntityListResponse

router = APIRouter(prefix="/entities")

STATUS_BY_KIND = {
    ResultKind.SUCCESS: 200,
    ResultKind.VALIDATION: 422,
    ResultKind.NOT_FOUND: 404,
    ResultKind.DISABLED: 403,
    ResultKind.PERSISTENCE: 500,
}


async def read_form(request: Request) -> Dict[str, Any]:
    """Turn a multipart/urlencoded body into the engine's form mapping."""
    form = await request.form()
    data: Dict[str, Any] = {}
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            data[key] = SubmittedFile(
                filename=value.filename or "",
                content=await value.read(),
                content_type=value.content_type or "application/octet-stream",
            )
        else:
            data[key] = value
    return data


def to_response(result: ActionResult, success_status: int = 200) -> JSONResponse:
    status = success_status if result.success else STATUS_BY_KIND[result.kind]
    body = ActionResponse(
        success=result.success,
        errors=result.errors,
        error=result.error,
        warnings=result.warnings,
        record=result.record,
    )
    return JSONResponse(status_code=status, content=jsonable_encoder(body))


@router.get("", response_model=EntityListResponse)
def list_entities(
    request: Request,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    crud: CRUDService = Depends(get_crud),
):
    entity = request.app.state.entity
    if not request.app.state.features.crud.read:
        raise HTTPException(status_code=403, detail="read is disabled")
    order_by = {"createdAt": "desc"} if entity.get_field("createdAt") else None
    result = crud.find_paginated(page=page, page_size=page_size, order_by=order_by)
    return EntityListResponse(
        items=result.data,
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/{id}")
def get_entity(id: str, request: Request, crud: CRUDService = Depends(get_crud)):
    if not request.app.state.features.crud.read:
        raise HTTPException(status_code=403, detail="read is disabled")
    record = crud.find_by_id(id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"{request.app.state.entity.name} not found")
    return jsonable_encoder(record)


@router.post("")
async def create_entity(request: Request, actions: EntityActions = Depends(get_actions)):
    form = await read_form(request)
    result = await run_in_threadpool(actions.create, form)
    return to_response(result, success_status=201)


@router.put("/{id}")
async def update_entity(id: str, request: Request, actions: EntityActions = Depends(get_actions)):
    form = await read_form(request)
    result = await run_in_threadpool(actions.update, id, form)
    return to_response(result)


@router.delete("/{id}")
async def delete_entity(id: str, actions: EntityActions = Depends(get_actions)):
    result = await run_in_threadpool(actions.delete, id)
    return to_response(result)
