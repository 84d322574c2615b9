import uuid

from fastapi import APIRouter, Depends, Response

from app.dependencies import get_comment_service, get_current_author
from app.exceptions import NotFoundError
from app.schemas import CommentRequest, CommentResponse, MessageResponse
from app.services.comment_service import CommentService

router = APIRouter(prefix="/api/comment", tags=["comment"])

@router.get("", response_model=list[CommentResponse])
async def list_comments(service: CommentService = Depends(get_comment_service)):
    return await service.list()

@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(comment_id: uuid.UUID, service: CommentService = Depends(get_comment_service)):
    comment = await service.get_by_id(comment_id)
    if comment is None:
        raise NotFoundError("Comment", comment_id)
    return comment

@router.post("", status_code=201, response_model=MessageResponse)
async def create_comment(
    data: CommentRequest,
    response: Response,
    author: str = Depends(get_current_author),
    service: CommentService = Depends(get_comment_service),
):
    comment = await service.add(data, author)
    response.headers["Location"] = f"{router.prefix}/{comment.id}"
    return MessageResponse(message="Comment added successfully", id=comment.id)

@router.put("/{comment_id}", response_model=MessageResponse)
async def update_comment(
    comment_id: uuid.UUID,
    data: CommentRequest,
    service: CommentService = Depends(get_comment_service),
):
    if not await service.update(comment_id, data):
        raise NotFoundError("Comment", comment_id)
    return MessageResponse(message="Comment updated successfully", id=comment_id)

@router.delete("/{comment_id}", status_code=204)
async def delete_comment(comment_id: uuid.UUID, service: CommentService = Depends(get_comment_service)):
    if not await service.delete(comment_id):
        raise NotFoundError("Comment", comment_id)
    return Response(status_code=204)
