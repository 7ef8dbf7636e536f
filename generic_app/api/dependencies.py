from fastapi import HTTPException, Request
from generic_app.crud.engine import EntityActions
from generic_app.crud.service import CRUDService


def get_actions(request: Request) -> EntityActions:
    return request.app.state.actions


def get_crud(request: Request) -> CRUDService:
    crud = request.app.state.crud
    if crud is None:
        raise HTTPException(status_code=500, detail="Entity model is not available")
    return crud
