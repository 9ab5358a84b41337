from pydantic import BaseModel, Field, validator, validate_email
from typing import Optional


class OwnerEmailModel(BaseModel):
    """Base for payloads carrying the email that owns a comment"""
    email: str

    @validator('email')
    def validate_owner_email(cls, v):
        # email is the ownership key; reject malformed input but never normalize it
        validate_email(v)
        return v


class CommentUser(OwnerEmailModel):
    name: str


class CommentCreate(BaseModel):
    movie_id: str
    comment: str
    user: CommentUser


class CommentUpdate(OwnerEmailModel):
    comment_id: str
    updated_comment: str


class CommentDelete(OwnerEmailModel):
    comment_id: str


class CommentCreateResponse(BaseModel):
    success: bool = True
    comment_id: str


class CommentUpdateResponse(BaseModel):
    success: bool = True
    matched_count: int
    modified_count: int


class CommentDeleteResponse(BaseModel):
    success: bool = True
    deleted_count: int


class CommenterCount(BaseModel):
    email: Optional[str] = Field(alias="_id")
    count: int

    class Config:
        populate_by_name = True
