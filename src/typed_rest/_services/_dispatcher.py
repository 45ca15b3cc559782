import asyncio
import time
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from logging import getLogger
from typing import Optional

from httpx import AsyncClient, Request, Response, TransportError, codes

from .._utils.constants import LOGGER_NAME
from ..models.errors import RestClientError
from ._hooks import ClientHooks, resolve


class CallOutcome(str, Enum):
    SUCCESS = "success"
    NO_CONTENT = "no_content"
    PROTOCOL_ERROR = "protocol_error"
    TRANSPORT_FAILURE = "transport_failure"
    CANCELLED = "cancelled"
    ABORTED = "aborted"


@dataclass
class CallResult:
    """Outcome of one dispatched call.

    ``response`` is the real response, or a ``205 Reset Content`` placeholder
    when a failed or cancelled call was suppressed by the after-call hook.
    ``raise_error`` tells the caller whether ``error`` must be raised.
    ``ABORTED`` means the before-call hook raised and nothing was sent.
    """

    outcome: CallOutcome
    request: Request
    call_time: timedelta
    response: Optional[Response] = None
    error: Optional[BaseException] = None
    raise_error: bool = False

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response is not None else None

    @property
    def is_success_status_code(self) -> bool:
        return self.outcome in (CallOutcome.SUCCESS, CallOutcome.NO_CONTENT)

    @property
    def is_placeholder(self) -> bool:
        return self.outcome in (CallOutcome.TRANSPORT_FAILURE, CallOutcome.CANCELLED)


def reset_content_response(request: Request) -> Response:
    return Response(codes.RESET_CONTENT, request=request)


class Dispatcher:
    """Sends composed requests, times them and classifies the outcome.

    The response body is read before the result is returned, so failures
    while reading it are handled like failures while sending. The dispatcher
    never raises for HTTP or transport failures itself, nor when the
    before-call hook fails; it records on the returned :class:`CallResult`
    whether the caller should.
    """

    def __init__(self, hooks: ClientHooks, *, throw_on_cancellation: bool = True) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._hooks = hooks
        self.throw_on_cancellation = throw_on_cancellation

    async def dispatch(self, client: AsyncClient, request: Request) -> CallResult:
        started = time.perf_counter()
        try:
            await resolve(self._hooks.before_call(request))
        except asyncio.CancelledError as e:
            return await self._failed(request, started, e, CallOutcome.CANCELLED)
        except Exception as e:
            call_time = self._stop_timer(started)
            self._logger.debug(f"Before-call hook failed: {type(e).__name__}: {e}")
            return CallResult(
                CallOutcome.ABORTED, request, call_time, error=e, raise_error=True
            )

        self._logger.debug(f"Calling API {client.base_url} {request.method} {request.url}")
        try:
            response = await client.send(request, stream=True)
            try:
                await response.aread()
            finally:
                await response.aclose()
        except asyncio.CancelledError as e:
            return await self._failed(request, started, e, CallOutcome.CANCELLED)
        except TransportError as e:
            return await self._failed(request, started, e, CallOutcome.TRANSPORT_FAILURE)

        call_time = self._stop_timer(started)
        if response.is_success:
            await resolve(self._hooks.after_call(response, None))
            outcome = (
                CallOutcome.NO_CONTENT
                if response.status_code == codes.NO_CONTENT
                else CallOutcome.SUCCESS
            )
            return CallResult(outcome, request, call_time, response=response)

        self._logger.debug(f"API call failed with status code {response.status_code}")
        error = RestClientError.from_response(response, response.text)
        should_raise = bool(await resolve(self._hooks.after_call(response, error)))
        return CallResult(
            CallOutcome.PROTOCOL_ERROR,
            request,
            call_time,
            response=response,
            error=error,
            raise_error=should_raise,
        )

    async def _failed(
        self,
        request: Request,
        started: float,
        error: BaseException,
        outcome: CallOutcome,
    ) -> CallResult:
        call_time = self._stop_timer(started)
        self._logger.debug(f"API call {outcome.value}: {type(error).__name__}: {error}")

        should_raise = bool(await resolve(self._hooks.after_call(None, error)))
        if outcome == CallOutcome.CANCELLED:
            should_raise = should_raise and self.throw_on_cancellation
            if not should_raise:
                task = asyncio.current_task()
                if task is not None:
                    task.uncancel()

        return CallResult(
            outcome,
            request,
            call_time,
            response=None if should_raise else reset_content_response(request),
            error=error,
            raise_error=should_raise,
        )

    def _stop_timer(self, started: float) -> timedelta:
        call_time = timedelta(seconds=time.perf_counter() - started)
        self._logger.debug(f"API call took {call_time}")
        return call_time
