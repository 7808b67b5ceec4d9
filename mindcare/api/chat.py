"""
Chat API: every user message is classified, stored and counted; high and crisis
messages also auto-schedule a counsellor follow-up. Returns the stored message, a
supportive reply and the appointment, if one was made.
"""
import logging

from fastapi import APIRouter, Depends

from mindcare.api.dependencies import get_current_user, get_reply_selector, get_store
from mindcare.core.errors import ForbiddenError
from mindcare.core.permissions import AuthenticatedUser
from mindcare.core.responses import ReplySelector
from mindcare.db.kv_store import KVStore
from mindcare.schemas.chat import ChatHistoryResponse, ChatRequest, ChatResponse
from mindcare.services.pipeline import chat_history, submit_chat_message

router = APIRouter()
logger = logging.getLogger(__name__)

# Staff who may read any student's conversation
_HISTORY_READERS = ("counsellor", "admin")


@router.post("", response_model=ChatResponse)
async def post_message(
    request: ChatRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    store: KVStore = Depends(get_store),
    selector: ReplySelector = Depends(get_reply_selector),
):
    outcome = submit_chat_message(store, user.user_id, request.message, selector)
    return ChatResponse(message=outcome.message, reply=outcome.reply, appointment=outcome.appointment)


@router.get("/{user_id}", response_model=ChatHistoryResponse)
async def get_history(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    store: KVStore = Depends(get_store),
):
    """Oldest first. Students can only read their own history."""
    if user.user_id != user_id and user.role not in _HISTORY_READERS:
        raise ForbiddenError("You can only view your own chat history")
    return ChatHistoryResponse(messages=chat_history(store, user_id))
