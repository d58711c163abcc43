"""
Answer routes: CRUD on /api/answers plus follow / unfollow.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, ConfigDict, Field

from src.answers import Answer, AnswerRepository
from src.shared.logging import setup_logging

logger = setup_logging("gateway.routes.answers", level="INFO")

router = APIRouter()


def get_repository(request: Request) -> AnswerRepository:
    """Return the process-wide repository created in the app lifespan."""
    return request.app.state.repository


# ─── Request/Response Models ────────────────────────────────


class AnswerFields(BaseModel):
    """Request body for POST and PATCH /api/answers.

    Values are passed through untyped; the repository validates them
    and unknown fields are dropped there.
    """

    model_config = ConfigDict(extra="allow")

    answername: Any = Field(None, description="2-16 letters, numbers or underscores")


class FollowRequest(BaseModel):
    """Request body for follow / unfollow."""

    other: str = Field(..., description="Answername to follow or unfollow")


class AnswerResponse(BaseModel):
    """A single answer."""

    answername: str | None = Field(None, description="Identity key")
    element_id: str | None = Field(None, description="Store-assigned node id")
    properties: dict[str, Any] = Field(default_factory=dict, description="All node properties")

    @classmethod
    def from_answer(cls, answer: Answer) -> "AnswerResponse":
        return cls(
            answername=answer.answername,
            element_id=answer.element_id,
            properties=answer.properties,
        )


class AnswerDetailResponse(AnswerResponse):
    """An answer together with who it follows and everyone else."""

    following: list[AnswerResponse] = Field(default_factory=list)
    others: list[AnswerResponse] = Field(default_factory=list)


# ─── Routes ─────────────────────────────────────────────────


@router.get("/answers", response_model=list[AnswerResponse])
async def list_answers(
    repository: AnswerRepository = Depends(get_repository),
) -> list[AnswerResponse]:
    """List every answer."""
    answers = await repository.get_all()
    return [AnswerResponse.from_answer(a) for a in answers]


@router.post("/answers", response_model=AnswerResponse, status_code=201)
async def create_answer(
    body: AnswerFields,
    repository: AnswerRepository = Depends(get_repository),
) -> AnswerResponse:
    """Create an answer. 400 if the answername is invalid or taken."""
    answer = await repository.create(body.model_dump(exclude_none=True))
    return AnswerResponse.from_answer(answer)


@router.get("/answers/{answername}", response_model=AnswerDetailResponse)
async def show_answer(
    answername: str,
    repository: AnswerRepository = Depends(get_repository),
) -> AnswerDetailResponse:
    """Show an answer with its following / others split."""
    answer = await repository.get(answername)
    following, others = await repository.get_following_and_others(answer)
    return AnswerDetailResponse(
        **AnswerResponse.from_answer(answer).model_dump(),
        following=[AnswerResponse.from_answer(a) for a in following],
        others=[AnswerResponse.from_answer(a) for a in others],
    )


@router.patch("/answers/{answername}", response_model=AnswerResponse)
async def edit_answer(
    answername: str,
    body: AnswerFields,
    repository: AnswerRepository = Depends(get_repository),
) -> AnswerResponse:
    """Partially update an answer."""
    answer = await repository.get(answername)
    await repository.patch(answer, body.model_dump(exclude_none=True))
    return AnswerResponse.from_answer(answer)


@router.delete("/answers/{answername}", status_code=204)
async def delete_answer(
    answername: str,
    repository: AnswerRepository = Depends(get_repository),
) -> Response:
    """Delete an answer and its follows edges. Idempotent."""
    await repository.delete(answername)
    return Response(status_code=204)


@router.post("/answers/{answername}/follow", status_code=204)
async def follow(
    answername: str,
    body: FollowRequest,
    repository: AnswerRepository = Depends(get_repository),
) -> Response:
    """Make ``answername`` follow ``body.other``."""
    await repository.follow(answername, body.other)
    logger.info(f"{answername} now follows {body.other}")
    return Response(status_code=204)


@router.post("/answers/{answername}/unfollow", status_code=204)
async def unfollow(
    answername: str,
    body: FollowRequest,
    repository: AnswerRepository = Depends(get_repository),
) -> Response:
    """Stop ``answername`` following ``body.other``."""
    await repository.unfollow(answername, body.other)
    logger.info(f"{answername} unfollowed {body.other}")
    return Response(status_code=204)
