"""Blog post routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from blog_api.routes.dependencies import get_post_service, get_request_correlation_id
from blog_api.schemas.error import BadRequestError, NoLeakNotFoundError
from blog_api.schemas.post import BlogPost, CreatePostRequest, UpdatePostRequest
from blog_api.services.posts import PostService

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.get("", response_model=list[BlogPost])
def list_posts(
    service: Annotated[PostService, Depends(get_post_service)],
) -> list[BlogPost]:
    return service.list_posts()


@router.get(
    "/{postId}",
    response_model=BlogPost,
    responses={404: {"model": NoLeakNotFoundError}},
)
def get_post(
    post_id: Annotated[str, Path(alias="postId")],
    service: Annotated[PostService, Depends(get_post_service)],
) -> BlogPost:
    return service.get_post(post_id=post_id)


@router.post(
    "",
    response_model=BlogPost,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": BadRequestError}},
)
def create_post(
    payload: CreatePostRequest,
    correlation_id: Annotated[str, Depends(get_request_correlation_id)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> BlogPost:
    return service.create_post(payload=payload, correlation_id=correlation_id)


@router.put(
    "/{postId}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        204: {"description": "Post updated"},
        400: {"model": BadRequestError},
        404: {"model": NoLeakNotFoundError},
    },
)
def update_post(
    post_id: Annotated[str, Path(alias="postId")],
    payload: UpdatePostRequest,
    correlation_id: Annotated[str, Depends(get_request_correlation_id)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Response:
    service.update_post(post_id=post_id, payload=payload, correlation_id=correlation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{postId}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={204: {"description": "Post deleted"}},
)
def delete_post(
    post_id: Annotated[str, Path(alias="postId")],
    correlation_id: Annotated[str, Depends(get_request_correlation_id)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Response:
    service.delete_post(post_id=post_id, correlation_id=correlation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
