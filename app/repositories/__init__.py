# Repositories package.
#
# One repository per aggregate, each wrapping the basic CRUD primitives
# over the request-scoped AsyncSession:
#
#   base                — abstract interfaces the services depend on
#   post_repository     — SQLAlchemy implementation for Post
#   comment_repository  — SQLAlchemy implementation for Comment
#
# Every mutating call commits immediately; there is no batching across
# calls.
