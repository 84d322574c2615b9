class NotFoundError(Exception):
    """Raised when a resource addressed by id does not exist.

    Translated to a 404 problem response by ``ProblemDetailsMiddleware``.
    """

    def __init__(self, resource: str, resource_id) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} with id: {resource_id} not found")
