# 📄 File: app/modules/vet_care/presentation/api/v1/vetchat.py
# 🧭 Purpose (Layman Explanation):
# The chat window endpoint of the AI vet: send a message and/or a pet photo, get an answer.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router mounted under /api/users/vetchat (role user). Reads multipart form fields
# `text` and `imageData`, keeps the server-issued chat session id in the `vetchat_session_id`
# cookie (re-issued when the store no longer knows it) and reports input errors as
# `{error}` bodies.
#
# 🔄 Connected Modules / Calls From:
# - app.api.router

from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import JSONResponse

from app.modules.vet_care.domain.services.vetchat_service import VetChatService
from app.shared.config.settings import get_settings
from app.shared.core.dependencies import CurrentPrincipal, get_current_user
from app.shared.utils.logging import get_logger
from app.shared.utils.validators import parse_image_data

logger = get_logger(__name__)

SESSION_COOKIE = "vetchat_session_id"

vetchat_router = APIRouter()


@vetchat_router.post("", summary="Ask the AI vet")
async def vet_chat(
    request: Request,
    text: Optional[str] = Form(default=None),
    image_data: Optional[str] = Form(default=None, alias="imageData"),
    principal: CurrentPrincipal = Depends(get_current_user),
    service: VetChatService = Depends(),
) -> JSONResponse:
    try:
        image = parse_image_data(image_data)
    except ValueError:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid image data"})

    if not (text and text.strip()) and image is None:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "No text or image provided"})

    cookie_session_id = request.cookies.get(SESSION_COOKIE)
    session_id, reply = await service.reply(principal.id, cookie_session_id, text, image)

    response = JSONResponse(content={"response": reply, "sessionId": session_id})
    if session_id != cookie_session_id:
        settings = get_settings()
        response.set_cookie(
            SESSION_COOKIE,
            session_id,
            max_age=settings.VETCHAT_SESSION_COOKIE_MAX_AGE,
            httponly=True,
            secure=settings.COOKIE_SECURE,
            samesite="lax",
            path="/",
        )
        logger.info(f"Started vet chat session {session_id} for user {principal.id}")
    return response
