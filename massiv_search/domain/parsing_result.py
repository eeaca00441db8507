"""
Adapter-agnostic parsing result types.

Every adapter that turns server payloads into media items reports a malformed
entry as a ParsingError value instead of raising, so one bad entry never costs
the rest of a search response.
"""

from typing import Any, Iterable, List, Tuple, TypedDict, TypeGuard
from typing_extensions import Literal


class ParsingSuccess[T](TypedDict, total=True):
    out: T
    parsing_status: Literal["success"]


class ParsingError(TypedDict, total=True):
    parsing_status: Literal["error"]
    message: str
    context: str  # Raw payload, for debugging


type ParsedResult[T] = ParsingSuccess[T] | ParsingError


def parsing_success[T](out: T) -> ParsingSuccess[T]:
    return {"out": out, "parsing_status": "success"}


def parsing_error(message: str, raw_payload: Any) -> ParsingError:
    return {"parsing_status": "error", "message": message, "context": str(raw_payload)}


def is_parsing_success[T](result: ParsedResult[T]) -> TypeGuard[ParsingSuccess[T]]:
    """
    Usage:
        result = convert_raw_media_item(raw)
        if is_parsing_success(result):
            item = result["out"]
        else:
            print(result["message"])
    """
    return result.get("parsing_status") == "success"


def partition_results[T](results: Iterable[ParsedResult[T]]) -> Tuple[Tuple[T, ...], Tuple[ParsingError, ...]]:
    """Split parsed results into the successful outputs and the errors, each in input order."""
    outs: List[T] = []
    errors: List[ParsingError] = []
    for result in results:
        if is_parsing_success(result):
            outs.append(result["out"])
        else:
            errors.append(result)

    return tuple(outs), tuple(errors)
