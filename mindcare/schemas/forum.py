from datetime import datetime
from typing import List

from pydantic import Field

from mindcare.schemas.base import CamelModel, FrozenRecord


class ForumReply(FrozenRecord):
    id: str
    post_id: str
    author_id: str
    author_name: str
    content: str
    created_at: datetime


class ForumPost(FrozenRecord):
    id: str
    author_id: str
    author_name: str
    content: str
    category: str
    created_at: datetime
    replies: List[ForumReply] = []


class ForumPostRequest(CamelModel):
    content: str = Field(..., min_length=1, max_length=5000)
    category: str = Field("general", min_length=1, max_length=64)


class ForumReplyRequest(CamelModel):
    content: str = Field(..., min_length=1, max_length=5000)


class ForumPostsResponse(CamelModel):
    posts: List[ForumPost]
