from fastapi import APIRouter, Depends, HTTPException, Body, Request
from typing import List
from datetime import datetime, timezone
import logging

from mflix.db.errors import InvalidObjectIdError
from mflix.db.repository.comments import CommentsDAO
from mflix.schemas.comment import (
    CommentCreate, CommentUpdate, CommentDelete,
    CommentCreateResponse, CommentUpdateResponse, CommentDeleteResponse,
    CommenterCount,
)

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter()


def get_comments_dao(request: Request) -> CommentsDAO:
    return request.app.state.comments_dao


def raise_for_error_result(result):
    """Turn a DAO ``{"error": exc}`` result into an HTTPException."""
    if isinstance(result, dict) and "error" in result:
        error = result["error"]
        if isinstance(error, InvalidObjectIdError):
            raise HTTPException(status_code=400, detail=str(error))
        raise HTTPException(status_code=500, detail=f"Database error: {str(error)}")


@router.post("/", response_model=CommentCreateResponse)
async def post_comment(
    comment_data: CommentCreate = Body(...),
    comments_dao: CommentsDAO = Depends(get_comments_dao),
):
    """
    Post a comment on a movie
    """
    result = await comments_dao.add_comment(
        comment_data.movie_id,
        comment_data.user,
        comment_data.comment,
        datetime.now(timezone.utc),
    )
    raise_for_error_result(result)
    return CommentCreateResponse(comment_id=str(result.inserted_id))


@router.put("/", response_model=CommentUpdateResponse)
async def update_comment(
    update_data: CommentUpdate = Body(...),
    comments_dao: CommentsDAO = Depends(get_comments_dao),
):
    """
    Edit a comment owned by the given email
    """
    result = await comments_dao.update_comment(
        update_data.comment_id,
        update_data.email,
        update_data.updated_comment,
        datetime.now(timezone.utc),
    )
    raise_for_error_result(result)
    return CommentUpdateResponse(
        matched_count=result.matched_count,
        modified_count=result.modified_count,
    )


@router.delete("/", response_model=CommentDeleteResponse)
async def delete_comment(
    delete_data: CommentDelete = Body(...),
    comments_dao: CommentsDAO = Depends(get_comments_dao),
):
    """
    Delete a comment owned by the given email
    """
    try:
        result = await comments_dao.delete_comment(delete_data.comment_id, delete_data.email)
    except InvalidObjectIdError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error deleting comment: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error deleting comment: {str(e)}")
    return CommentDeleteResponse(deleted_count=result.deleted_count)


@router.get("/most-active", response_model=List[CommenterCount])
async def get_most_active_commenters(
    comments_dao: CommentsDAO = Depends(get_comments_dao),
):
    """
    Report the 20 users with the most comments
    """
    result = await comments_dao.most_active_commenters()
    raise_for_error_result(result)
    return result
