from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from generic_app.core.config import settings


def create_db_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Requests are served from FastAPI's threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


engine = create_db_engine(settings.database_url)
