"""JSON encoding of the persisted portfolio document."""

from typing import Optional

from pydantic import ValidationError

from networth.models.portfolio import PortfolioState
from networth.services.storage.interface import MalformedImportError


def dump_state(state: PortfolioState, indent: Optional[int] = None) -> str:
    """Serialize a portfolio. Timestamps become ISO-8601 text."""
    return state.model_dump_json(indent=indent)


def parse_state(text: str) -> PortfolioState:
    """
    Parse a serialized portfolio.
    
    Timestamps are rebuilt as datetimes and instrument values are
    recomputed from their details.
    
    Raises:
        MalformedImportError: With every problem found, if parsing fails
    """
    try:
        return PortfolioState.model_validate_json(text)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise MalformedImportError(f"Failed to import data: {problems}") from e
