"""Executor for one declared operation bound to its call arguments.

ApiRequest builds the outbound request, sends it through the transport and
turns the response into a value. Two call modes share one send routine:

get_result:
    Raises UnexpectedStatusError when the status code is not expected,
    before the body is decoded.

get_detailed:
    Always decodes, dumps request and response, and reports an unexpected
    status code as a flag instead of raising.
"""

import asyncio
import logging
import types
from typing import Any, Generic, Sequence, TypeVar, Union, get_args, get_origin

import httpx

from ..codecs import CodecRegistry
from ..contract.description import MethodDescription
from ..request.builder import ParameterBinding, RequestBuilder
from ..request.modifiers import ModifierLike
from ..response.classifier import Unexpected, classify, is_unexpected
from ..response.details import CallDetails
from ..response.dump import dump_request, dump_response
from .cancellation import raise_if_cancelled, run_cancellable
from .exceptions import ConfigurationError, ResponseDecodingError, TransportError
from .transport import TransportProvider

logger = logging.getLogger("restcall")

T = TypeVar("T")


def _type_name(tp: Any) -> str:
    if get_args(tp):
        return repr(tp)
    return getattr(tp, "__qualname__", None) or repr(tp)


def is_assignable(declared: Any, target: Any) -> bool:
    """Check that values of ``target`` type can be returned as ``declared``.

    Parameterized generics are compared argument by argument, so
    ``list[Admin]`` fits ``list[User]`` but ``list[str]`` does not fit
    ``list[int]``.
    """
    if declared in (Any, object) or declared == target:
        return True
    if get_origin(target) in (Union, types.UnionType):
        return all(is_assignable(declared, arg) for arg in get_args(target))
    if get_origin(declared) in (Union, types.UnionType):
        return any(is_assignable(arg, target) for arg in get_args(declared))

    declared_cls = get_origin(declared) or declared
    target_cls = get_origin(target) or target
    if not (isinstance(declared_cls, type) and isinstance(target_cls, type)):
        return False
    if not issubclass(target_cls, declared_cls):
        return False

    declared_args = get_args(declared)
    if not declared_args:
        return True
    target_args = get_args(target)
    if len(target_args) != len(declared_args):
        return False
    return all(d == t or is_assignable(d, t) for d, t in zip(declared_args, target_args))


class ApiRequest(Generic[T]):
    """Tunable, sendable request for one operation call.

    ``modifiers`` and ``expected_codes`` belong to this instance; clone()
    copies them so a clone can be tuned without affecting the original.

    Usage:
        request = ApiRequest(
            "https://api.example.com",
            registry.get("get_user"),
            bind_arguments(registry.get("get_user"), [42]),
            lambda: transport,
            return_type=User,
        )
        request.modifiers.append(HeaderModifier("Authorization", "Bearer ..."))
        user = await request.get_result()
        details = await request.get_detailed()
    """

    def __init__(
        self,
        base_url: str | None,
        description: MethodDescription,
        bindings: Sequence[ParameterBinding],
        transport_provider: TransportProvider,
        return_type: Any = None,
        decode_type: Any = None,
        codecs: CodecRegistry | None = None,
    ):
        """Initialize request.

        Args:
            base_url: Address the relative path is joined to
            description: Declared operation
            bindings: Call arguments paired with declared parameters
            transport_provider: Zero-argument callable returning the transport
            return_type: Declared result type (Any if omitted)
            decode_type: Type the body is decoded into. Defaults to
                return_type and must be assignable to it.
            codecs: Codec registry (shared default registry if omitted)

        Raises:
            ConfigurationError: If decode_type is not assignable to return_type
                or the description is inconsistent
        """
        if transport_provider is None:
            raise ConfigurationError("transport_provider is required")
        description.check()

        self.base_url = base_url
        self.description = description
        self._bindings = list(bindings)
        self._transport_provider = transport_provider
        self._return_type = Any if return_type is None else return_type
        self._decode_type = self._return_type if decode_type is None else decode_type

        if not is_assignable(self._return_type, self._decode_type):
            raise ConfigurationError(
                f"Specified return type '{_type_name(self._decode_type)}' must be "
                f"assignable to method return type '{_type_name(self._return_type)}'"
            )

        self._builder = RequestBuilder(codecs)
        self.modifiers: list[ModifierLike] = []
        self.expected_codes: list[int] = sorted(description.expected_codes)

    def __repr__(self) -> str:
        label = self.description.operation_id or self.description.url
        return f"ApiRequest({self.description.http_method} {label!r})"

    @property
    def bindings(self) -> list[ParameterBinding]:
        return list(self._bindings)

    @property
    def return_type(self) -> Any:
        return self._return_type

    def clone(self) -> "ApiRequest[T]":
        """Independent copy with its own modifier and expected code lists."""
        copy: ApiRequest[T] = ApiRequest(
            self.base_url,
            self.description,
            self._bindings,
            self._transport_provider,
            return_type=self._return_type,
            decode_type=self._decode_type,
            codecs=self._builder.codecs,
        )
        copy.modifiers.extend(self.modifiers)
        copy.expected_codes[:] = self.expected_codes
        return copy

    async def get_result(self, cancel: asyncio.Event | None = None) -> T:
        """Send the request and return the decoded response body.

        Args:
            cancel: Optional signal; setting it aborts the call

        Raises:
            ConfigurationError, UriConstructionError, ModificationError:
                If the request cannot be built
            TransportError: If no response was received
            UnexpectedStatusError: If the status code is not expected
            ResponseDecodingError: If the body cannot be decoded
            asyncio.CancelledError: If the call was cancelled
        """
        response, _ = await self._send(cancel)

        classification = await classify(response, self.expected_codes)
        if isinstance(classification, Unexpected):
            logger.debug(
                f"Unexpected status {classification.status_code} for {self!r}: "
                f"{classification.message[:100]}"
            )
            raise classification.to_error()

        return self._decode(response)

    async def get_detailed(self, cancel: asyncio.Event | None = None) -> CallDetails[T]:
        """Send the request and return the value with full diagnostics.

        Never raises for an unexpected status code. If the body of an
        unexpected response cannot be decoded, response_content is None and
        the failure is kept in decode_error.

        Args:
            cancel: Optional signal; setting it aborts the call

        Raises:
            ConfigurationError, UriConstructionError, ModificationError:
                If the request cannot be built
            TransportError: If no response was received
            ResponseDecodingError: If the body of an expected response
                cannot be decoded
            asyncio.CancelledError: If the call was cancelled
        """
        response, request = await self._send(cancel)

        decode_error = None
        try:
            content = self._decode(response)
        except ResponseDecodingError as e:
            if not is_unexpected(response.status_code, self.expected_codes):
                raise
            logger.warning(f"Could not decode body of unexpected response for {self!r}: {e}")
            content = None
            decode_error = e

        request_dump = dump_request(request)
        response_dump = dump_response(response)

        classification = await classify(response, self.expected_codes)
        unexpected = isinstance(classification, Unexpected)

        return CallDetails(
            response_content=content,
            request=request,
            response=response,
            request_dump=request_dump,
            response_dump=response_dump,
            status_code=response.status_code,
            is_unexpected_status_code=unexpected,
            unexpected_message=classification.message if unexpected else None,
            decode_error=decode_error,
        )

    async def _send(self, cancel: asyncio.Event | None) -> tuple[httpx.Response, httpx.Request]:
        """Build and send the request; return the response and the sent request."""
        raise_if_cancelled(cancel)

        outbound = self._builder.build(
            self.base_url,
            self.description,
            self._bindings,
            self.modifiers,
        )
        request = outbound.to_httpx()

        try:
            transport = self._transport_provider()
        except Exception as e:
            raise TransportError(
                f"Transport is not available: {e}",
                transport_unavailable=True,
            ) from e
        if transport is None:
            raise TransportError("Transport provider returned None", transport_unavailable=True)

        try:
            response = await run_cancellable(transport.send(request), cancel)
            # Body reads of streamed responses are cancellable too
            await run_cancellable(response.aread(), cancel)
        except TransportError:
            raise
        except Exception as e:
            raise TransportError(f"Sending {request.method} {request.url} failed: {e}") from e

        logger.debug(f"{request.method} {request.url} -> {response.status_code}")
        return response, request

    def _decode(self, response: httpx.Response) -> Any:
        try:
            return self._builder.codecs.deserialize(
                response.content,
                self._decode_type,
                response.headers.get("content-type"),
            )
        except ResponseDecodingError as e:
            e.status_code = response.status_code
            raise
