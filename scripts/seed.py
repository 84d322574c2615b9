"""Populate a development database with sample posts and comments."""
import argparse
import asyncio
import random
import time

from app.database import engine, async_session, Base
from app.repositories.comment_repository import SqlAlchemyCommentRepository
from app.repositories.post_repository import SqlAlchemyPostRepository
from app.schemas import CommentRequest, PostRequest
from app.services.comment_service import CommentService
from app.services.post_service import PostService

TOPICS = ["python", "fastapi", "postgresql", "docker", "testing", "performance",
          "security", "asyncio", "sqlalchemy", "pydantic"]
AUTHORS = ["alice", "bob", "carol", "dave", "erin"]


async def seed(small: bool = False):
    num_posts = 10 if small else 200
    max_comments_per_post = 2 if small else 5

    print(f"Seeding: {num_posts} posts, up to {max_comments_per_post} comments each")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    total_comments = 0
    async with async_session() as session:
        posts = PostService(SqlAlchemyPostRepository(session))
        comments = CommentService(SqlAlchemyCommentRepository(session))

        for i in range(num_posts):
            topic = random.choice(TOPICS)
            post = await posts.add(PostRequest(
                title=f"Post {i}: notes on {topic}",
                content=f"This is the full content of post {i} about {topic}. " * 10,
            ))
            for _ in range(random.randint(1, max_comments_per_post)):
                await comments.add(
                    CommentRequest(
                        post_id=post.id,
                        content=f"Thanks for writing about {topic}, very helpful.",
                    ),
                    author=random.choice(AUTHORS),
                )
                total_comments += 1

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Posts: {num_posts}")
    print(f"  Comments: {total_comments}")


def main():
    parser = argparse.ArgumentParser(description="Seed the blog database")
    parser.add_argument("--small", action="store_true", help="Use small dataset (10 posts)")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
