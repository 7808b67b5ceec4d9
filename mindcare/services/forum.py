"""
Peer support forum. Posts live under forum:<id>; each reply is its own record under
forum-reply:<post_id>:<epoch-ms>:<id>, so replying never rewrites the post.
"""
import uuid
from datetime import datetime, timezone

from mindcare.core.errors import NotFoundError
from mindcare.db.kv_store import KVStore
from mindcare.schemas.forum import ForumPost, ForumReply
from mindcare.schemas.user import UserProfile

FORUM_PREFIX = "forum:"
REPLY_PREFIX = "forum-reply:"


def create_post(store: KVStore, author: UserProfile, content: str, category: str) -> ForumPost:
    post = ForumPost(
        id=str(uuid.uuid4()),
        author_id=author.id,
        author_name=author.name,
        content=content,
        category=category,
        created_at=datetime.now(timezone.utc),
    )
    store.set(f"{FORUM_PREFIX}{post.id}", post.to_record())
    return post


def list_posts(store: KVStore) -> list[ForumPost]:
    """Newest first, each with its replies oldest first."""
    replies: dict[str, list[ForumReply]] = {}
    for record in store.get_by_prefix(REPLY_PREFIX):
        reply = ForumReply.model_validate(record)
        replies.setdefault(reply.post_id, []).append(reply)

    posts = []
    for record in store.get_by_prefix(FORUM_PREFIX):
        post = ForumPost.model_validate(record)
        thread = sorted(replies.get(post.id, []), key=lambda r: r.created_at)
        posts.append(post.model_copy(update={"replies": thread}))
    return sorted(posts, key=lambda p: p.created_at, reverse=True)


def reply_to_post(store: KVStore, post_id: str, author: UserProfile, content: str) -> ForumReply:
    if not store.get(f"{FORUM_PREFIX}{post_id}"):
        raise NotFoundError("Post not found")
    now = datetime.now(timezone.utc)
    reply = ForumReply(
        id=str(uuid.uuid4()),
        post_id=post_id,
        author_id=author.id,
        author_name=author.name,
        content=content,
        created_at=now,
    )
    store.set(f"{REPLY_PREFIX}{post_id}:{int(now.timestamp() * 1000)}:{reply.id}", reply.to_record())
    return reply
