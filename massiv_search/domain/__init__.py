"""Domain types shared across adapters - no I/O or side effects."""

from massiv_search.domain.parsing_result import (
    ParsedResult,
    ParsingError,
    ParsingSuccess,
    is_parsing_success,
    parsing_error,
    parsing_success,
    partition_results,
)

__all__ = [
    "ParsedResult",
    "ParsingError",
    "ParsingSuccess",
    "is_parsing_success",
    "parsing_error",
    "parsing_success",
    "partition_results",
]
