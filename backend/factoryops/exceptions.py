class FactoryOpsError(Exception):
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidInputError(FactoryOpsError):
    status_code = 400


class UnauthorizedError(FactoryOpsError):
    status_code = 401


class ForbiddenError(FactoryOpsError):
    status_code = 403


class NotFoundError(FactoryOpsError):
    status_code = 404


class ConflictError(FactoryOpsError):
    status_code = 409
