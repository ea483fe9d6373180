from typing import Annotated
from pydantic import PlainSerializer


def round_money(value: float) -> float:
    """Round a currency value for display (two decimals)."""
    return round(value, 2)


# Currency kept at full float precision in Python, rounded only in JSON output
Money = Annotated[float, PlainSerializer(round_money, return_type=float, when_used="json")]
