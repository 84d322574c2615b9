# Services package.
#
# Each module exposes one service class for a single domain aggregate:
#
#   post_service     — CRUD for Post, refreshes updated_at on update
#   comment_service  — CRUD for Comment, assigns the author, projects to DTOs
#
# Services receive their repository in the constructor; the wiring to the
# request-scoped AsyncSession lives in ``app.dependencies`` so the router
# layer controls the unit of work via ``get_db``.
