from fastapi import FastAPI
import logging
from mflix.api.v1.endpoints import comments
from mflix.core.config import LOG_LEVEL
from mflix.db.repository.comments import CommentsDAO
from mflix.db.session import create_client, get_db, ensure_collections_exist

app = FastAPI(
    title="MflixCommentsBE",
    description="Comments API for the mflix movie catalog",
    version="1.0.0",
)

app.state.comments_dao = CommentsDAO()


@app.on_event("startup")
async def startup_event():
    logging.basicConfig(level=LOG_LEVEL)
    client = create_client()
    app.state.mongo_client = client
    await ensure_collections_exist(get_db(client, app.state.comments_dao.db_name))
    app.state.comments_dao.inject_db(client)


@app.on_event("shutdown")
async def shutdown_event():
    client = getattr(app.state, "mongo_client", None)
    if client is not None:
        client.close()


app.include_router(comments.router, prefix="/comments", tags=["Comments"])
