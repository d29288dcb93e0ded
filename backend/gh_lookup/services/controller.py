import asyncio
from typing import Any, Dict, Optional, Set, Union

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from ..datasources.base import FetchError, LookupSource
from ..schemas import (
    FieldChange,
    LookupState,
    Mode,
    ModeChanged,
    NameChanged,
    Query,
    RepoResult,
    UserResult,
)
from .validation import InvalidNameError, validate_name

FETCH_ERROR_MESSAGES = {
    Mode.USER: "Error fetching user data",
    Mode.REPO: "Error fetching repo data",
}

_field_change_adapter = TypeAdapter(FieldChange)


class LookupController:
    """Owns the form state and runs one GitHub lookup per submission.

    Every submission takes the next generation number. Only the settlement of
    the newest generation touches the result slots, the error and the loading
    flag; older settlements are dropped.
    """

    def __init__(self, source: LookupSource, state: Optional[LookupState] = None):
        self.source = source
        self.state = state or LookupState()
        self._generation = 0
        self._pending: Set[asyncio.Task] = set()

    def snapshot(self) -> LookupState:
        return self.state.model_copy(deep=True)

    def update_field(self, field_name: str, raw_value: str) -> None:
        change = _field_change_adapter.validate_python({"field": field_name, "value": raw_value})
        self.apply(change)

    def apply(self, change: FieldChange) -> None:
        if isinstance(change, NameChanged):
            try:
                self.state.query.name = validate_name(change.value)
            except InvalidNameError as exc:
                logger.debug(f"Rejected name input {change.value!r}")
                self.state.input_error = str(exc)
            else:
                self.state.input_error = None
        elif isinstance(change, ModeChanged):
            self.state.query.mode = change.value
        else:
            raise TypeError(f"Unsupported field change: {change!r}")

    async def submit(self, query: Optional[Query] = None) -> LookupState:
        generation, query = self._begin(query)
        await self._settle(generation, query)
        return self.snapshot()

    def submit_nowait(self, query: Optional[Query] = None) -> asyncio.Task:
        """Start a submission and return the task that settles it.

        Must be called from a running event loop.
        """
        generation, query = self._begin(query)
        task = asyncio.get_running_loop().create_task(self._settle(generation, query))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def _begin(self, query: Optional[Query]) -> tuple[int, Query]:
        if query is None:
            query = self.state.query.model_copy()
        else:
            query = Query.model_validate(query.model_dump())
        self._generation += 1
        self.state.request.loading = True
        self.state.request.error = None
        self.state.query.name = ""
        logger.info(f"Submitting {query.mode.value} lookup for {query.name!r} (#{self._generation})")
        return self._generation, query

    async def _settle(self, generation: int, query: Query) -> None:
        try:
            data = await self.source.fetch(query.mode, query.name)
            result = _decode(query.mode, data)
        except (FetchError, ValidationError) as exc:
            if self._is_current(generation):
                self._fail(query.mode, exc)
        else:
            if self._is_current(generation):
                self._succeed(query.mode, result)
        finally:
            if generation == self._generation:
                self.state.request.loading = False

    def _is_current(self, generation: int) -> bool:
        if generation == self._generation:
            return True
        logger.info(f"Dropping settlement of lookup #{generation}; #{self._generation} is newer")
        return False

    def _succeed(self, mode: Mode, result: Union[UserResult, RepoResult]) -> None:
        if mode is Mode.USER:
            self.state.user_result = result
        else:
            self.state.repo_result = result
        self.state.request.error = None

    def _fail(self, mode: Mode, exc: Exception) -> None:
        message = FETCH_ERROR_MESSAGES[mode]
        logger.error(f"{message}: {exc}")
        self.state.request.error = message


def _decode(mode: Mode, data: Dict[str, Any]) -> Union[UserResult, RepoResult]:
    if mode is Mode.USER:
        return UserResult.model_validate(data)
    return RepoResult.model_validate(data)
