from pydantic import BaseModel
from typing import Optional


class ProblemDetail(BaseModel):
    """RFC 7807 compliant error response."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    status: int
    instance: Optional[str] = None
    code: str


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        status_code: int,
        title: str,
        *,
        code: str,
        detail: str | None = None,
        type_: str = "about:blank",
    ) -> None:
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type = type_
        self.code = code


class InvalidRoundSnapshot(DomainException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=400,
            title="Invalid round",
            detail=detail,
            code="invalid_round",
        )


class HoleOutOfRange(DomainException):
    def __init__(self, hole: int, holes_in_round: int) -> None:
        super().__init__(
            status_code=400,
            title="Hole out of range",
            detail=f"hole {hole} is not between 1 and {holes_in_round}",
            code="hole_out_of_range",
        )

