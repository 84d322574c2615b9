import uuid

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_post_service
from app.exceptions import NotFoundError
from app.mapping import post_to_response
from app.schemas import MessageResponse, PostRequest, PostResponse
from app.services.post_service import PostService

router = APIRouter(prefix="/api/post", tags=["post"])

@router.get("", response_model=list[PostResponse])
async def list_posts(service: PostService = Depends(get_post_service)):
    return [post_to_response(p) for p in await service.list()]

@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: uuid.UUID, service: PostService = Depends(get_post_service)):
    post = await service.get_by_id(post_id)
    if post is None:
        raise NotFoundError("Post", post_id)
    return post_to_response(post)

@router.post("", response_model=MessageResponse)
async def create_post(data: PostRequest, service: PostService = Depends(get_post_service)):
    post = await service.add(data)
    return MessageResponse(message="Post added successfully", id=post.id)

@router.put("/{post_id}", response_model=MessageResponse)
async def update_post(
    post_id: uuid.UUID, data: PostRequest, service: PostService = Depends(get_post_service)
):
    if not await service.update(post_id, data):
        raise HTTPException(status_code=400, detail=f"Post with id: {post_id} not found")
    return MessageResponse(message="Post updated successfully", id=post_id)

@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(post_id: uuid.UUID, service: PostService = Depends(get_post_service)):
    if not await service.delete(post_id):
        raise HTTPException(status_code=400, detail=f"Post with id: {post_id} not found")
    return MessageResponse(message="Post deleted successfully", id=post_id)
