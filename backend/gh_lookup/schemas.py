from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

NAME_PATTERN = r"^[A-Za-z0-9]*$"


class Mode(str, Enum):
    USER = "user"
    REPO = "repo"


class Query(BaseModel):
    name: str = Field(default="", pattern=NAME_PATTERN)
    mode: Mode = Mode.USER


class UserResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    login: str
    public_repo_count: int = Field(alias="public_repos")


class RepoResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    star_count: int = Field(alias="stargazers_count")


class RequestState(BaseModel):
    loading: bool = False
    error: Optional[str] = None


class LookupState(BaseModel):
    """Everything the form shows; owned and mutated by the controller."""

    query: Query = Field(default_factory=Query)
    input_error: Optional[str] = None
    request: RequestState = Field(default_factory=RequestState)
    user_result: Optional[UserResult] = None
    repo_result: Optional[RepoResult] = None


class NameChanged(BaseModel):
    field: Literal["name"] = "name"
    value: str


class ModeChanged(BaseModel):
    field: Literal["mode"] = "mode"
    value: Mode


FieldChange = Annotated[Union[NameChanged, ModeChanged], Field(discriminator="field")]


class FieldUpdate(BaseModel):
    """Request body for a single keystroke or selection change."""

    field: Literal["name", "mode"]
    value: str
