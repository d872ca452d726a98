from typing import Optional

from fastapi import APIRouter, FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .consts import BASE_URL_DEFAULT
from .errors import NotFoundError
from .repository import Repository


class SchemaNamesResponse(BaseModel):
    success: bool = True
    names: list[str]


def create_router(repository: Repository) -> APIRouter:
    router = APIRouter(tags=["jsonform"])

    @router.get("/schemas", response_model=SchemaNamesResponse)
    def list_schemas():
        return SchemaNamesResponse(names=sorted(repository.names()))

    @router.get("/{name}-schema.json")
    def get_schema(name: str):
        try:
            form_schema = repository.get_schema_by_name(name)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

        return JSONResponse(form_schema.to_dict())

    return router


def create_app(repository: Optional[Repository] = None, prefix: str = BASE_URL_DEFAULT) -> FastAPI:
    if repository is None:
        from .config import Config

        repository = Repository.from_config(Config())

    app = FastAPI(title="JSON Form API")
    app.state.repository = repository
    app.include_router(create_router(repository), prefix=prefix.rstrip("/"))

    return app
