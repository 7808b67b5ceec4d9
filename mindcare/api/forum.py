"""Peer support forum: anyone can read; signed-in users post and reply."""
from fastapi import APIRouter, Depends

from mindcare.api.dependencies import get_current_user, get_store
from mindcare.core.permissions import AuthenticatedUser
from mindcare.db.kv_store import KVStore
from mindcare.schemas.forum import ForumPost, ForumPostRequest, ForumPostsResponse, ForumReply, ForumReplyRequest
from mindcare.services.directory import require_profile
from mindcare.services.forum import create_post, list_posts, reply_to_post

router = APIRouter()


@router.get("", response_model=ForumPostsResponse)
async def get_posts(store: KVStore = Depends(get_store)):
    return ForumPostsResponse(posts=list_posts(store))


@router.post("", response_model=ForumPost)
async def post(
    body: ForumPostRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    store: KVStore = Depends(get_store),
):
    return create_post(store, require_profile(store, user.user_id), body.content, body.category)


@router.post("/{post_id}/reply", response_model=ForumReply)
async def reply(
    post_id: str,
    body: ForumReplyRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    store: KVStore = Depends(get_store),
):
    return reply_to_post(store, post_id, require_profile(store, user.user_id), body.content)
