"""
Explicit DTO <-> entity conversions.

Each function copies fields one by one so the set of client-writable
fields is visible here rather than hidden in mapper configuration.
Server-managed fields (id, timestamps, author) are never read from a
request DTO.
"""
from app.models import Comment, Post
from app.schemas import CommentRequest, CommentResponse, PostRequest, PostResponse


# ---------------------------------------------------------------------------
# Post
# ---------------------------------------------------------------------------

def post_from_request(data: PostRequest) -> Post:
    return Post(title=data.title, content=data.content)


def apply_post_request(post: Post, data: PostRequest) -> None:
    post.title = data.title
    post.content = data.content


def post_to_response(post: Post) -> PostResponse:
    return PostResponse(
        id=post.id,
        title=post.title,
        content=post.content,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


# ---------------------------------------------------------------------------
# Comment
# ---------------------------------------------------------------------------

def comment_from_request(data: CommentRequest, author: str) -> Comment:
    return Comment(post_id=data.post_id, content=data.content, author=author)


def apply_comment_request(comment: Comment, data: CommentRequest) -> None:
    """Overlay the mutable fields of *data* onto *comment*.

    Only ``content`` is editable; a comment stays attached to the post it
    was created on.
    """
    comment.content = data.content


def comment_to_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        author=comment.author,
        content=comment.content,
        created_at=comment.created_at,
    )
