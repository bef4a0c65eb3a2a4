from fastapi import HTTPException, status


class PolicyConfigurationError(Exception):
    """Raised once at startup when the access tables reference each other inconsistently."""

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__(
            f"Access policy has {len(self.problems)} configuration problem(s): "
            + "; ".join(self.problems)
        )


class PermissionDeniedError(HTTPException):
    def __init__(self, detail: str = "Permission denied"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )
